"""
Objets valeur du pipeline d'export.

Familles de donnees exportees, mode d'execution, codes de resultat terminaux
et evenements de progression consommes par la couche de notification.
"""

from dataclasses import dataclass
from enum import Enum


class ExportFamily(str, Enum):
    """Famille de donnees exportee, dans l'ordre d'execution du pipeline.

    Valeurs:
        SHOWS: Series suivies avec saisons et episodes
        LISTS: Listes utilisateur avec leurs elements
        MOVIES: Films suivis
    """

    SHOWS = "shows"
    LISTS = "lists"
    MOVIES = "movies"

    def file_name(self, prefix: str) -> str:
        """Nom du fichier d'export en chemin fixe (ex: st-shows-export.json)."""
        return f"{prefix}-{self.value}-export.json"

    @property
    def handle_key(self) -> str:
        """Cle de preference du fichier de sauvegarde choisi pour cette famille."""
        return f"{self.value}_export_uri"


# Ordre fixe : series, puis listes, puis films
EXPORT_ORDER: tuple[ExportFamily, ...] = (
    ExportFamily.SHOWS,
    ExportFamily.LISTS,
    ExportFamily.MOVIES,
)


class ResultCode(str, Enum):
    """Resultat terminal d'une execution d'export."""

    SUCCESS = "success"
    FILE_ACCESS_ERROR = "file_access_error"
    GENERIC_ERROR = "generic_error"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ExportMode:
    """
    Mode d'une execution d'export.

    Attributs:
        full_dump: Exporte aussi les metadonnees (resumes, notes, acteurs...).
            Multiplie la taille des fichiers par 2 a 4.
        unattended: Sauvegarde automatique, toujours en chemin fixe
            et sans aucun message utilisateur.
    """

    full_dump: bool = False
    unattended: bool = False


@dataclass(frozen=True)
class ProgressEvent:
    """Progression d'une famille : completed remis a 0 au debut de chaque famille."""

    family: ExportFamily
    total: int
    completed: int
