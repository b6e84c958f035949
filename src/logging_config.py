"""
Configuration du logging de SerieTrack via loguru.

Deux sorties :
- stderr : lisible et coloree, niveau ajustable par -v / -q
- fichier : JSON avec rotation, toujours en DEBUG (historique des sauvegardes)
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Identifiant du handler console, remplace lors d'un changement de niveau
_console_handler_id: Optional[int] = None


def verbosity_level(base_level: str, verbose: int = 0, quiet: bool = False) -> str:
    """
    Niveau console correspondant aux options de verbosite.

    -q : ERROR uniquement ; -v : DEBUG ; -vv et plus : TRACE.
    """
    if quiet:
        return "ERROR"
    if verbose >= 2:
        return "TRACE"
    if verbose == 1:
        return "DEBUG"
    return base_level.upper()


def _add_console_handler(level: str) -> None:
    global _console_handler_id
    _console_handler_id = logger.add(
        sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True
    )


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/serietrack.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum de la sortie console
        log_file : Fichier de log JSON
        rotation_size : Taille avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conserves

    L'export tourne dans un thread dedie : le handler fichier passe par
    une file d'attente (enqueue).
    """
    logger.remove()
    _add_console_handler(log_level)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configure", log_file=str(log_file), rotation=rotation_size)


def set_console_level(level: str) -> None:
    """Change le niveau de la sortie console (sans effet avant configure_logging)."""
    if _console_handler_id is None:
        return
    logger.remove(_console_handler_id)
    _add_console_handler(level)
