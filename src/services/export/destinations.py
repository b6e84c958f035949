"""
Resolution des destinations d'export.

Pour chaque famille, choisit entre le chemin fixe et le fichier de sauvegarde
choisi par l'utilisateur (handle), selon une table de decision indexee par
(execution automatique, mecanisme de handles disponible).
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from loguru import logger

from src.adapters.file_system import (
    FixedPathDestination,
    HandleDestination,
    ensure_directory,
    is_volume_writable,
)
from src.config import Settings
from src.core.errors import FileAccessError
from src.core.ports.destination import IDestination
from src.core.ports.preferences import IPreferenceStore
from src.core.value_objects import ExportFamily, ExportMode


class DestinationStrategy(Enum):
    """Strategie de destination d'une execution."""

    FIXED_PATH = "fixed_path"
    HANDLE = "handle"


# (unattended, handles_available) -> strategie
_DECISION_TABLE: dict[tuple[bool, bool], DestinationStrategy] = {
    (True, True): DestinationStrategy.FIXED_PATH,
    (True, False): DestinationStrategy.FIXED_PATH,
    (False, False): DestinationStrategy.FIXED_PATH,
    (False, True): DestinationStrategy.HANDLE,
}


@dataclass(frozen=True)
class DestinationPlan:
    """
    Parametres de destination d'une execution.

    Attributs:
        volume_root: Racine publique (telechargements) qui doit etre montee
        export_root: Repertoire des exports interactifs en chemin fixe
        auto_backup_root: Repertoire des sauvegardes automatiques
        file_prefix: Prefixe des noms de fichiers (ex: "st")
        handles_available: Mecanisme de fichiers choisis disponible
    """

    volume_root: Path
    export_root: Path
    auto_backup_root: Path
    file_prefix: str = "st"
    handles_available: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "DestinationPlan":
        return cls(
            volume_root=settings.downloads_dir,
            export_root=settings.export_root,
            auto_backup_root=settings.auto_backup_root,
            file_prefix=settings.export_file_prefix,
            handles_available=settings.destination_handles_enabled,
        )

    def export_path(self, unattended: bool) -> Path:
        """Repertoire d'export fixe pour le mode d'execution."""
        return self.auto_backup_root if unattended else self.export_root


def get_export_path(settings: Settings, unattended: bool) -> Path:
    """Repertoire ou sont ecrits les exports en chemin fixe."""
    return DestinationPlan.from_settings(settings).export_path(unattended)


class DestinationResolver:
    """
    Resout la destination de chaque famille pour une execution.

    Attributs injectes:
        plan: Parametres de destination de l'execution
        preferences: Stockage des fichiers de sauvegarde choisis
    """

    def __init__(self, plan: DestinationPlan, preferences: IPreferenceStore) -> None:
        self._plan = plan
        self._preferences = preferences

    def strategy(self, mode: ExportMode) -> DestinationStrategy:
        return _DECISION_TABLE[(mode.unattended, self._plan.handles_available)]

    def prepare(self, mode: ExportMode) -> None:
        """
        Prepare le repertoire d'export fixe avant la premiere famille.

        Sans effet pour la strategie handle. Leve FileAccessError si le volume
        est indisponible ou si le repertoire ne peut pas etre cree.
        """
        if self.strategy(mode) is not DestinationStrategy.FIXED_PATH:
            return
        if not is_volume_writable(self._plan.volume_root):
            raise FileAccessError(f"Volume indisponible: {self._plan.volume_root}")
        ensure_directory(self._plan.export_path(mode.unattended))

    def resolve(self, family: ExportFamily, mode: ExportMode) -> IDestination:
        """
        Retourne la destination de la famille.

        Leve FileAccessError si aucun fichier de sauvegarde n'a ete choisi
        pour la famille (strategie handle).
        """
        if self.strategy(mode) is DestinationStrategy.FIXED_PATH:
            path = self._plan.export_path(mode.unattended) / family.file_name(self._plan.file_prefix)
            logger.debug(f"Destination {family.value}: chemin fixe {path}")
            return FixedPathDestination(path)

        handle = self._preferences.get_destination_handle(family)
        if not handle:
            raise FileAccessError(f"Aucun fichier de sauvegarde choisi pour {family.value}")
        logger.debug(f"Destination {family.value}: fichier choisi {handle}")
        return HandleDestination(family, handle, self._preferences)
