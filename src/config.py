"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe SERIETRACK_,
et peut optionnellement être fournie via un fichier .env.

Le mécanisme de fichiers de sauvegarde choisis par l'utilisateur (handles) peut être
désactivé : les exports interactifs utilisent alors le chemin fixe.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe SERIETRACK_.
    Exemple : SERIETRACK_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="SERIETRACK_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Export (chemin fixe : <downloads_dir>/<export_folder>[/AutoBackup])
    downloads_dir: Path = Field(default=Path("~/Downloads"))
    export_folder: str = Field(default="SerieTrack", min_length=1)
    export_file_prefix: str = Field(default="st", min_length=1)
    destination_handles_enabled: bool = Field(default=True)
    full_dump: bool = Field(default=False)

    # Base de données
    database_url: str = Field(default="sqlite:///serietrack.db")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/serietrack.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("downloads_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def export_root(self) -> Path:
        """Répertoire des exports interactifs en chemin fixe."""
        return self.downloads_dir / self.export_folder

    @property
    def auto_backup_root(self) -> Path:
        """Répertoire des sauvegardes automatiques."""
        return self.export_root / "AutoBackup"
