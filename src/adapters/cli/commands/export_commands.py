"""
Commande CLI d'export JSON (export).
"""

import asyncio
from typing import Annotated, Optional

import typer

from src.adapters.cli.helpers import console, with_container
from src.adapters.cli.notifications import BackupNotifier, ExportProgressDisplay
from src.core.value_objects import ExportMode, ResultCode
from src.services.export.task import run_export_async


def export(
    full: Annotated[
        Optional[bool],
        typer.Option(
            "--full/--light",
            help="Inclure les metadonnees (resumes, notes, acteurs...). Defaut: configuration",
        ),
    ] = None,
    auto: Annotated[
        bool,
        typer.Option(
            "--auto",
            help="Sauvegarde automatique: chemin fixe AutoBackup, aucun message",
        ),
    ] = False,
) -> None:
    """
    Exporte les series, listes et films en fichiers JSON.

    Un fichier par famille. En mode interactif, les fichiers choisis avec
    'backup-file set' sont utilises ; en mode --auto, le dossier AutoBackup.
    """
    result = asyncio.run(_export_async(full, auto))
    if result is not ResultCode.SUCCESS:
        raise typer.Exit(code=1)


@with_container()
async def _export_async(container, full: Optional[bool], auto: bool) -> ResultCode:
    """Implementation async de la commande export."""
    config = container.config()
    mode = ExportMode(
        full_dump=config.full_dump if full is None else full,
        unattended=auto,
    )
    plan = container.destination_plan()
    coordinator = container.export_coordinator()
    notifier = BackupNotifier(console, silent=mode.unattended)

    if mode.unattended:
        result = await run_export_async(coordinator, mode, plan)
    else:
        with ExportProgressDisplay(console) as display:
            result = await run_export_async(
                coordinator, mode, plan, on_progress=display.update
            )

    notifier.notify(result)
    return result
