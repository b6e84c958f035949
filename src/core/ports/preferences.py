"""
Interface port pour le stockage persistant des preferences.

L'export n'y lit et n'y ecrit que deux choses : l'horodatage de la derniere
sauvegarde automatique reussie, et le fichier de sauvegarde choisi par
l'utilisateur pour chaque famille.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.core.value_objects import ExportFamily


class IPreferenceStore(ABC):
    """Interface du stockage des preferences de sauvegarde."""

    @abstractmethod
    def get_last_backup(self) -> Optional[int]:
        """Horodatage (ms depuis epoch) de la derniere sauvegarde auto, ou None."""
        ...

    @abstractmethod
    def set_last_backup(self, timestamp_ms: int) -> None:
        """Enregistre l'horodatage de la derniere sauvegarde auto reussie."""
        ...

    @abstractmethod
    def get_destination_handle(self, family: ExportFamily) -> Optional[str]:
        """Fichier de sauvegarde enregistre pour la famille, ou None."""
        ...

    @abstractmethod
    def store_destination_handle(self, family: ExportFamily, handle: Optional[str]) -> None:
        """Enregistre (ou efface avec None) le fichier de sauvegarde d'une famille."""
        ...
