"""
Couche de notification de l'export.

- ExportProgressDisplay : barre de progression Rich par famille
- BackupNotifier : message de resultat unique, silencieux en mode automatique
"""

from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
)

from src.core.value_objects import ExportFamily, ProgressEvent, ResultCode

FAMILY_LABELS: dict[ExportFamily, str] = {
    ExportFamily.SHOWS: "Series",
    ExportFamily.LISTS: "Listes",
    ExportFamily.MOVIES: "Films",
}

RESULT_MESSAGES: dict[ResultCode, tuple[str, str]] = {
    ResultCode.SUCCESS: ("green", "Sauvegarde terminee."),
    ResultCode.FILE_ACCESS_ERROR: (
        "red",
        "Sauvegarde impossible : fichier ou dossier de sauvegarde inaccessible. "
        "Choisissez un nouveau fichier avec 'serietrack backup-file set'.",
    ),
    ResultCode.GENERIC_ERROR: ("red", "Sauvegarde echouee."),
    ResultCode.CANCELLED: ("yellow", "Sauvegarde annulee."),
}


class ExportProgressDisplay:
    """
    Affiche la progression (total, completed) de chaque famille.

    Utilisable comme context manager ; update() recoit les ProgressEvent.
    """

    def __init__(self, console: Console) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        )
        self._tasks: dict[ExportFamily, TaskID] = {}

    def __enter__(self) -> "ExportProgressDisplay":
        self._progress.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._progress.stop()

    def update(self, event: ProgressEvent) -> None:
        task_id = self._tasks.get(event.family)
        if task_id is None:
            task_id = self._progress.add_task(
                f"[cyan]{FAMILY_LABELS[event.family]}", total=event.total
            )
            self._tasks[event.family] = task_id
        self._progress.update(task_id, total=event.total, completed=event.completed)


class BackupNotifier:
    """Affiche exactement un message de resultat, sauf en mode silencieux."""

    def __init__(self, console: Console, silent: bool = False) -> None:
        self._console = console
        self._silent = silent

    @staticmethod
    def message_for(result: ResultCode) -> str:
        return RESULT_MESSAGES[result][1]

    def notify(self, result: ResultCode) -> Optional[str]:
        """Affiche le message du resultat et le retourne (None si silencieux)."""
        if self._silent:
            return None
        color, message = RESULT_MESSAGES[result]
        self._console.print(f"[{color}]{message}[/{color}]")
        return message
