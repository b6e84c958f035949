"""
Interfaces ports pour la source de donnees de l'export.

La source de donnees expose des lectures parametrees retournant des jeux de
lignes ordonnes, une lecture par famille et par niveau d'enfants.
Les lignes sont des mappings indexes par nom de colonne.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import Any

Row = Mapping[str, Any]


class RowSet(ABC):
    """
    Jeu de lignes ordonne, fini, a parcours unique.

    Le nombre de lignes est connu avant le parcours. Un RowSet est une
    ressource : il doit etre ferme apres usage (context manager).
    """

    @property
    @abstractmethod
    def count(self) -> int:
        """Nombre de lignes du jeu, fixe a l'ouverture."""
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[Row]:
        ...

    @abstractmethod
    def close(self) -> None:
        """Libere le curseur sous-jacent. Idempotent."""
        ...

    def __enter__(self) -> "RowSet":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class IExportDataSource(ABC):
    """
    Interface de lecture de la base de suivi pour l'export.

    Toutes les methodes levent DataSourceError si la requete echoue.
    """

    @abstractmethod
    def query_shows(self, full_dump: bool) -> RowSet:
        """Series triees par titre (insensible a la casse)."""
        ...

    @abstractmethod
    def query_seasons(self, show_id: int) -> RowSet:
        """Saisons d'une serie, colonnes id et season."""
        ...

    @abstractmethod
    def query_episodes(self, season_id: int, full_dump: bool) -> RowSet:
        """Episodes d'une saison tries par numero."""
        ...

    @abstractmethod
    def query_lists(self) -> RowSet:
        """Listes triees par ordre explicite puis par nom."""
        ...

    @abstractmethod
    def query_list_items(self, list_id: str) -> RowSet:
        """Elements d'une liste dans l'ordre d'insertion."""
        ...

    @abstractmethod
    def query_movies(self, full_dump: bool) -> RowSet:
        """Films tries par titre (insensible a la casse)."""
        ...
