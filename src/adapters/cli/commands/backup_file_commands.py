"""
Commandes CLI de gestion des fichiers de sauvegarde (backup-file set/show/clear).

Un fichier de sauvegarde est choisi par famille avant l'export interactif ;
il est oublie automatiquement si l'export ne peut plus y ecrire.
"""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from src.adapters.cli.helpers import console, with_container
from src.adapters.cli.notifications import FAMILY_LABELS
from src.core.value_objects import EXPORT_ORDER, ExportFamily
from src.services.export.destinations import get_export_path

backup_file_app = typer.Typer(
    name="backup-file",
    help="Gestion des fichiers de sauvegarde par famille",
)


@backup_file_app.command("set")
def backup_file_set(
    family: Annotated[ExportFamily, typer.Argument(help="Famille: shows, lists ou movies")],
    path: Annotated[Path, typer.Argument(help="Fichier de sauvegarde (cree si absent)")],
) -> None:
    """Choisit le fichier de sauvegarde d'une famille."""
    asyncio.run(_backup_file_set_async(family, path))


@with_container()
async def _backup_file_set_async(container, family: ExportFamily, path: Path) -> None:
    """Implementation async de la commande backup-file set."""
    target = path.expanduser().resolve()
    try:
        target.touch(exist_ok=True)
    except OSError as e:
        console.print(f"[red]Erreur:[/red] Fichier inaccessible: {target} ({e})")
        raise typer.Exit(code=1)

    container.preference_store().store_destination_handle(family, target.as_uri())
    console.print(f"[green]{FAMILY_LABELS[family]}[/green] -> {target}")


@backup_file_app.command("show")
def backup_file_show() -> None:
    """Affiche les fichiers de sauvegarde choisis et la derniere sauvegarde auto."""
    asyncio.run(_backup_file_show_async())


@with_container()
async def _backup_file_show_async(container) -> None:
    """Implementation async de la commande backup-file show."""
    preferences = container.preference_store()

    table = Table(title="Fichiers de sauvegarde")
    table.add_column("Famille", style="cyan")
    table.add_column("Fichier")
    for family in EXPORT_ORDER:
        handle = preferences.get_destination_handle(family)
        table.add_row(FAMILY_LABELS[family], handle or "[dim](aucun)[/dim]")
    console.print(table)

    console.print(f"Sauvegardes auto : {get_export_path(container.config(), unattended=True)}")
    console.print(f"Derniere sauvegarde auto : {format_last_backup(preferences.get_last_backup())}")


@backup_file_app.command("clear")
def backup_file_clear(
    family: Annotated[
        Optional[ExportFamily],
        typer.Argument(help="Famille a oublier (toutes si absente)"),
    ] = None,
) -> None:
    """Oublie le fichier de sauvegarde d'une famille (ou de toutes)."""
    asyncio.run(_backup_file_clear_async(family))


@with_container()
async def _backup_file_clear_async(container, family: Optional[ExportFamily]) -> None:
    """Implementation async de la commande backup-file clear."""
    preferences = container.preference_store()
    families = (family,) if family is not None else EXPORT_ORDER
    for item in families:
        preferences.store_destination_handle(item, None)
        console.print(f"[yellow]{FAMILY_LABELS[item]}[/yellow]: fichier oublie")


def format_last_backup(timestamp_ms: Optional[int]) -> str:
    """Formate l'horodatage de derniere sauvegarde (ms) pour l'affichage."""
    if timestamp_ms is None:
        return "jamais"
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")
