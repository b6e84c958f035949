"""
Interface port pour les destinations d'export.

Une destination sait s'ouvrir en ecriture (flux binaire) et s'invalider
quand elle s'avere inutilisable.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO


class IDestination(ABC):
    """Destination d'ecriture d'une famille d'export."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Description lisible (chemin) pour les logs."""
        ...

    @abstractmethod
    def open_for_write(self) -> BinaryIO:
        """
        Ouvre la destination en ecriture, en tronquant le contenu existant.

        Leve FileAccessError si la destination ne peut pas etre ouverte.
        """
        ...

    @abstractmethod
    def invalidate(self) -> None:
        """Oublie la destination apres un echec d'ecriture."""
        ...
