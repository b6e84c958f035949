"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.backup_file_commands import (
    backup_file_app,
    backup_file_clear,
    backup_file_set,
    backup_file_show,
    format_last_backup,
)
from src.adapters.cli.commands.export_commands import export

__all__ = [
    # export
    "export",
    # backup-file
    "backup_file_app",
    "backup_file_set",
    "backup_file_show",
    "backup_file_clear",
    "format_last_backup",
]
