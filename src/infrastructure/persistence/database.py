"""
Acces a la base de suivi SQLite de SerieTrack.

- get_engine : engine unique, cree a partir de SERIETRACK_DATABASE_URL
- get_session : generateur de sessions SQLModel
- init_db : creation des tables manquantes

L'export lit la base depuis un thread dedie : l'engine SQLite autorise
l'usage d'une connexion hors du thread qui l'a ouverte.
"""

from collections.abc import Generator
from pathlib import Path
from typing import Optional

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.engine import make_url
from sqlmodel import Session, SQLModel, create_engine

# Engine global - cree au premier appel de get_engine()
_engine: Optional[Engine] = None


def sqlite_file(database_url: str) -> Optional[Path]:
    """Fichier d'une URL SQLite, ou None (base en memoire ou autre moteur)."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
        return None
    return Path(url.database)


def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Retourne l'engine de la base de suivi, en le creant si necessaire.

    Sans URL, celle de la configuration est utilisee. L'URL n'est lue
    qu'a la creation : les appels suivants retournent le meme engine.
    """
    global _engine
    if _engine is None:
        if database_url is None:
            from src.config import Settings
            database_url = Settings().database_url

        db_file = sqlite_file(database_url)
        if db_file is not None:
            db_file.parent.mkdir(parents=True, exist_ok=True)

        connect_args = {}
        if make_url(database_url).get_backend_name() == "sqlite":
            connect_args["check_same_thread"] = False
        _engine = create_engine(database_url, echo=False, connect_args=connect_args)
        logger.debug("Engine cree", database_url=database_url)
    return _engine


def get_session() -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation :
        session = next(get_session())
    """
    with Session(get_engine()) as session:
        yield session


def init_db(database_url: Optional[str] = None) -> Engine:
    """
    Cree les tables de la base de suivi si elles n'existent pas.

    Appelee une fois au demarrage (ressource du container).
    """
    # Import local : enregistre les tables dans SQLModel.metadata
    from src.infrastructure.persistence import models  # noqa: F401

    engine = get_engine(database_url)
    SQLModel.metadata.create_all(engine)
    return engine
