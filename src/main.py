"""
Point d'entrée CLI de SerieTrack.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import backup_file_app, export, format_last_backup
from .config import Settings
from .container import Container
from .infrastructure.persistence.data_source import count_rows
from .logging_config import configure_logging, set_console_level, verbosity_level
from .services.export.destinations import get_export_path

VERSION = "0.1.0"

app = typer.Typer(
    name="serietrack",
    help="Sauvegarde JSON des séries, listes et films suivis",
)
container = Container()


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """SerieTrack - Sauvegarde de la base de suivi."""
    if verbose or quiet:
        set_console_level(verbosity_level(get_config().log_level, verbose, quiet))


app.command()(export)

# Monter backup_file_app comme sous-commande
app.add_typer(backup_file_app, name="backup-file")


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle et l'état des sauvegardes."""
    config = get_config()
    logger.info("Configuration SerieTrack")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Export (chemin fixe) : {get_export_path(config, unattended=False)}")
    typer.echo(f"Sauvegardes auto : {get_export_path(config, unattended=True)}")
    typer.echo(
        f"Fichiers choisis : {'activés' if config.destination_handles_enabled else 'désactivés'}"
    )
    typer.echo(f"Export complet par défaut : {'oui' if config.full_dump else 'non'}")
    typer.echo(f"Niveau de log : {config.log_level}")

    typer.echo(
        "Dernière sauvegarde auto : "
        f"{format_last_backup(container.preference_store().get_last_backup())}"
    )
    for family, count in count_rows(container.data_source()).items():
        typer.echo(f"  {family} : {count if count is not None else 'illisible'}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"SerieTrack v{VERSION}")


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    # Initialise la base de données (crée les tables si nécessaire)
    container.database.init()

    logger.info("Démarrage de SerieTrack", version=VERSION)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
