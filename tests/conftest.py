"""
Fixtures pytest partagees pour les tests SerieTrack.

Ce module contient les fixtures communes utilisees dans les tests:
- Base SQLite en memoire et session SQLModel
- Jeu de donnees de suivi (series, saisons, episodes, listes, films)
- Doubles : voir tests/fixtures/export_data.py
- Settings et plan de destination avec chemins temporaires
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.config import Settings
from src.core.value_objects import ExportFamily
from src.infrastructure.persistence import models  # noqa: F401
from src.infrastructure.persistence.models import (
    EpisodeModel,
    ListItemModel,
    ListModel,
    MovieModel,
    SeasonModel,
    ShowModel,
)
from src.services.export.destinations import DestinationPlan


# ============================================================================
# Base de donnees
# ============================================================================


@pytest.fixture
def engine():
    """Engine SQLite en memoire partage entre threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded_session(session: Session) -> Session:
    """
    Base de suivi peuplee.

    - 2 series inserees dans le desordre ("breaking Bad" en minuscule pour le tri)
    - Breaking Bad : saison 2 inseree avant la saison 1, episodes 2 puis 1
    - 2 listes, dont une avec un element de type inconnu
    - 2 films
    """
    session.add(ShowModel(id=2, title="the Wire", status=1))
    session.add(
        ShowModel(
            id=1,
            title="breaking Bad",
            favorite=True,
            status=0,
            overview="Chimie",
            rating_global=9.3,
            rating_votes=10,
            genres="Crime|Drame",
        )
    )
    session.add(SeasonModel(id=12, show_id=1, number=2))
    session.add(SeasonModel(id=11, show_id=1, number=1))
    session.add(EpisodeModel(id=102, season_id=11, show_id=1, number=2, watched=2, title="Cat's in the Bag"))
    session.add(EpisodeModel(id=101, season_id=11, show_id=1, number=1, watched=1, title="Pilot"))
    session.add(ListModel(list_id="l-2", name="Zebre", sort_order=0))
    session.add(ListModel(list_id="l-1", name="alpha", sort_order=0))
    session.add(ListModel(list_id="l-3", name="Premier", sort_order=-1))
    session.add(ListItemModel(list_item_id="1-1-l-1", list_id="l-1", item_ref_id=1, item_type=1))
    session.add(ListItemModel(list_item_id="99-9-l-1", list_id="l-1", item_ref_id=99, item_type=9))
    session.add(ListItemModel(list_item_id="101-3-l-1", list_id="l-1", item_ref_id=101, item_type=3))
    session.add(MovieModel(tmdb_id=603, title="the Matrix", watched=True))
    session.add(MovieModel(tmdb_id=19995, title="Avatar", in_collection=True, overview="Pandora"))
    session.commit()
    return session


# ============================================================================
# Destinations
# ============================================================================


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec chemins temporaires."""
    downloads_dir = tmp_path / "downloads"
    downloads_dir.mkdir()
    return Settings(
        downloads_dir=downloads_dir,
        export_folder="SerieTrack",
        export_file_prefix="st",
        database_url=f"sqlite:///{tmp_path}/test.db",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def plan(test_settings: Settings) -> DestinationPlan:
    """Plan de destination avec handles disponibles."""
    return DestinationPlan.from_settings(test_settings)


@pytest.fixture
def fixed_plan(test_settings: Settings) -> DestinationPlan:
    """Plan de destination sans mecanisme de handles (chemin fixe force)."""
    return DestinationPlan.from_settings(
        test_settings.model_copy(update={"destination_handles_enabled": False})
    )


@pytest.fixture
def handle_files(tmp_path: Path) -> dict[ExportFamily, Path]:
    """Fichiers de sauvegarde existants, un par famille."""
    directory = tmp_path / "granted"
    directory.mkdir()
    files = {}
    for family in ExportFamily:
        path = directory / f"{family.value}.json"
        path.write_text("ancien contenu", encoding="utf-8")
        files[family] = path
    return files
