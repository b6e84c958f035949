"""
Module de persistance SQLite pour SerieTrack.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Configuration de l'engine SQLite, session factory, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees
- data_source.py : Lectures ordonnees pour l'export (IExportDataSource)
- preference_store.py : Preferences persistantes (IPreferenceStore)

Usage:
    from src.infrastructure.persistence import init_db, get_session

    init_db()  # Cree les tables si necessaire
    session = next(get_session())
    data_source = SQLModelExportDataSource(session)
"""

from src.infrastructure.persistence.data_source import SQLModelExportDataSource
from src.infrastructure.persistence.database import get_engine, get_session, init_db
from src.infrastructure.persistence.models import (
    EpisodeModel,
    ListItemModel,
    ListModel,
    MovieModel,
    PreferenceModel,
    SeasonModel,
    ShowModel,
)
from src.infrastructure.persistence.preference_store import SQLModelPreferenceStore

__all__ = [
    "get_engine",
    "get_session",
    "init_db",
    "SQLModelExportDataSource",
    "SQLModelPreferenceStore",
    "ShowModel",
    "SeasonModel",
    "EpisodeModel",
    "ListModel",
    "ListItemModel",
    "MovieModel",
    "PreferenceModel",
]
