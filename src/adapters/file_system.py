"""
Adaptateur pour les destinations d'export sur le systeme de fichiers.

Deux implementations de IDestination :
- FixedPathDestination : fichier dans le repertoire d'export fixe
  (<telechargements>/<dossier>[/AutoBackup]/<prefixe>-<famille>-export.json)
- HandleDestination : fichier de sauvegarde choisi au prealable par l'utilisateur
  et enregistre dans les preferences, oublie des qu'il devient inutilisable

Fournit egalement les verifications du volume de stockage.
"""

import os
from pathlib import Path
from typing import BinaryIO
from urllib.parse import unquote, urlparse

from loguru import logger

from src.core.errors import FileAccessError
from src.core.ports.destination import IDestination
from src.core.ports.preferences import IPreferenceStore
from src.core.value_objects import ExportFamily


def is_volume_writable(root: Path) -> bool:
    """Verifie que le volume de stockage est monte et accessible en ecriture."""
    return root.is_dir() and os.access(root, os.W_OK | os.X_OK)


def ensure_directory(path: Path) -> None:
    """
    Cree l'arborescence du repertoire d'export si necessaire.

    Leve FileAccessError si le repertoire ne peut pas etre cree.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileAccessError(f"Impossible de creer {path}: {e}") from e
    if not path.is_dir():
        raise FileAccessError(f"{path} n'est pas un repertoire")


def handle_to_path(handle: str) -> Path:
    """Convertit un handle enregistre (chemin ou URI file://) en chemin."""
    if handle.startswith("file://"):
        return Path(unquote(urlparse(handle).path))
    return Path(handle).expanduser()


class FixedPathDestination(IDestination):
    """Fichier d'export dans le repertoire fixe, cree ou ecrase a chaque export."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def description(self) -> str:
        return str(self._path)

    def open_for_write(self) -> BinaryIO:
        try:
            return open(self._path, "wb")
        except OSError as e:
            raise FileAccessError(f"Impossible d'ouvrir {self._path}: {e}") from e

    def invalidate(self) -> None:
        # Rien a oublier : le chemin est recalcule a chaque execution
        logger.debug(f"Echec d'ecriture sur le chemin fixe {self._path}")


class HandleDestination(IDestination):
    """
    Fichier de sauvegarde choisi par l'utilisateur pour une famille.

    Le fichier doit exister (il a ete accorde hors du pipeline) ; il est
    tronque a l'ouverture. En cas d'echec, le handle est efface des
    preferences pour que la prochaine execution interactive redemande
    un fichier.
    """

    def __init__(self, family: ExportFamily, handle: str, preferences: IPreferenceStore) -> None:
        self._family = family
        self._handle = handle
        self._preferences = preferences

    @property
    def handle(self) -> str:
        return self._handle

    @property
    def description(self) -> str:
        return self._handle

    def open_for_write(self) -> BinaryIO:
        path = handle_to_path(self._handle)
        try:
            sink = open(path, "r+b")
        except OSError as e:
            raise FileAccessError(f"Fichier de sauvegarde inaccessible {self._handle}: {e}") from e
        try:
            sink.truncate(0)
        except OSError as e:
            sink.close()
            raise FileAccessError(f"Fichier de sauvegarde non modifiable {self._handle}: {e}") from e
        return sink

    def invalidate(self) -> None:
        logger.warning(
            f"Fichier de sauvegarde {self._family.value} oublie apres echec",
            handle=self._handle,
        )
        self._preferences.store_destination_handle(self._family, None)
