"""
Tests unitaires pour ExportCoordinator.

Tests couvrant:
- Export complet depuis la base SQLite (chemin fixe, modes reduit / complet)
- Fichiers choisis : absents, presents, devenus inaccessibles
- Mode automatique : horodatage de derniere sauvegarde en cas de succes uniquement
- Annulation avant le debut et en cours de famille
- Erreurs de lecture et donnees non serialisables
- Evenements de progression et idempotence
"""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.core.errors import DataSourceError
from src.core.ports.preferences import IPreferenceStore
from src.core.value_objects import ExportFamily, ExportMode, ProgressEvent, ResultCode
from src.infrastructure.persistence.data_source import SQLModelExportDataSource
from src.infrastructure.persistence.preference_store import SQLModelPreferenceStore
from src.services.export.cancellation import CancellationToken
from src.services.export.coordinator import ExportCoordinator
from src.services.export.destinations import DestinationPlan
from tests.fixtures.export_data import FakeDataSource, movie_row, show_row

INTERACTIVE = ExportMode(full_dump=False, unattended=False)
UNATTENDED = ExportMode(full_dump=False, unattended=True)
NOW_MS = 1700000000999


def _read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def mock_preferences() -> MagicMock:
    preferences = MagicMock(spec=IPreferenceStore)
    preferences.get_destination_handle.return_value = None
    return preferences


@pytest.fixture
def sql_coordinator(seeded_session) -> ExportCoordinator:
    return ExportCoordinator(
        SQLModelExportDataSource(seeded_session),
        SQLModelPreferenceStore(seeded_session),
        clock=lambda: NOW_MS,
    )


# ============================================================================
# Export depuis la base
# ============================================================================


class TestExportFromDatabase:
    """Export de bout en bout sur la base SQLite en memoire."""

    def test_writes_one_file_per_family(self, sql_coordinator, fixed_plan: DestinationPlan):
        result = sql_coordinator.run(INTERACTIVE, fixed_plan)

        assert result is ResultCode.SUCCESS
        shows = _read_json(fixed_plan.export_root / "st-shows-export.json")
        lists = _read_json(fixed_plan.export_root / "st-lists-export.json")
        movies = _read_json(fixed_plan.export_root / "st-movies-export.json")

        assert [s["title"] for s in shows] == ["breaking Bad", "the Wire"]
        assert [s["season"] for s in shows[0]["seasons"]] == [1, 2]
        episodes = shows[0]["seasons"][0]["episodes"]
        assert [(e["episode"], e["watched"], e["skipped"]) for e in episodes] == [
            (1, True, False),
            (2, False, True),
        ]
        assert shows[1]["seasons"] == []

        assert [item["list_id"] for item in lists] == ["l-3", "l-1", "l-2"]
        assert lists[1]["items"] == [
            {"list_item_id": "1-1-l-1", "tvdb_id": 1, "type": "show"},
            {"list_item_id": "101-3-l-1", "tvdb_id": 101, "type": "episode"},
        ]

        assert [m["title"] for m in movies] == ["Avatar", "the Matrix"]

    def test_reduced_mode_has_no_full_fields(self, sql_coordinator, fixed_plan):
        sql_coordinator.run(INTERACTIVE, fixed_plan)

        show = _read_json(fixed_plan.export_root / "st-shows-export.json")[0]
        movie = _read_json(fixed_plan.export_root / "st-movies-export.json")[0]
        assert "overview" not in show
        assert "genres" not in show
        assert "overview" not in movie

    def test_full_mode_has_full_fields(self, sql_coordinator, fixed_plan):
        result = sql_coordinator.run(ExportMode(full_dump=True), fixed_plan)

        assert result is ResultCode.SUCCESS
        show = _read_json(fixed_plan.export_root / "st-shows-export.json")[0]
        movie = _read_json(fixed_plan.export_root / "st-movies-export.json")[0]
        assert show["overview"] == "Chimie"
        assert show["genres"] == "Crime|Drame"
        assert movie["overview"] == "Pandora"

    def test_idempotent_files(self, sql_coordinator, fixed_plan):
        path = fixed_plan.export_root / "st-shows-export.json"
        sql_coordinator.run(INTERACTIVE, fixed_plan)
        first = path.read_bytes()
        sql_coordinator.run(INTERACTIVE, fixed_plan)

        assert path.read_bytes() == first

    def test_unattended_records_last_backup(self, sql_coordinator, plan, seeded_session):
        result = sql_coordinator.run(UNATTENDED, plan)

        assert result is ResultCode.SUCCESS
        assert (plan.auto_backup_root / "st-lists-export.json").exists()
        assert SQLModelPreferenceStore(seeded_session).get_last_backup() == NOW_MS


# ============================================================================
# Fichiers choisis
# ============================================================================


class TestHandleDestinations:
    """Export interactif vers les fichiers choisis."""

    def test_missing_handle_stops_run(self, plan, mock_preferences):
        data_source = FakeDataSource(shows=[show_row()], movies=[movie_row()])
        coordinator = ExportCoordinator(data_source, mock_preferences)

        result = coordinator.run(INTERACTIVE, plan)

        assert result is ResultCode.FILE_ACCESS_ERROR
        # Seule la premiere famille a ete lue ; aucun fichier fixe cree
        assert len(data_source.opened) == 1
        assert not plan.export_root.exists()
        mock_preferences.set_last_backup.assert_not_called()

    def test_writes_to_granted_files(self, sql_coordinator, plan, seeded_session, handle_files):
        store = SQLModelPreferenceStore(seeded_session)
        for family, path in handle_files.items():
            store.store_destination_handle(family, path.as_uri())

        result = sql_coordinator.run(INTERACTIVE, plan)

        assert result is ResultCode.SUCCESS
        assert len(_read_json(handle_files[ExportFamily.SHOWS])) == 2
        assert len(_read_json(handle_files[ExportFamily.LISTS])) == 3
        assert len(_read_json(handle_files[ExportFamily.MOVIES])) == 2
        assert not plan.export_root.exists()

    def test_revoked_handle_is_cleared(self, sql_coordinator, plan, seeded_session, handle_files):
        store = SQLModelPreferenceStore(seeded_session)
        for family, path in handle_files.items():
            store.store_destination_handle(family, path.as_uri())
        handle_files[ExportFamily.LISTS].unlink()

        result = sql_coordinator.run(INTERACTIVE, plan)

        assert result is ResultCode.FILE_ACCESS_ERROR
        assert store.get_destination_handle(ExportFamily.LISTS) is None
        assert store.get_destination_handle(ExportFamily.SHOWS) is not None
        # Les series ont ete ecrites, les films jamais tentes
        assert len(_read_json(handle_files[ExportFamily.SHOWS])) == 2
        assert handle_files[ExportFamily.MOVIES].read_text(encoding="utf-8") == "ancien contenu"


# ============================================================================
# Mode automatique
# ============================================================================


class TestUnattended:
    """Sauvegarde automatique."""

    def test_empty_database_succeeds(self, plan, mock_preferences):
        data_source = FakeDataSource()
        coordinator = ExportCoordinator(data_source, mock_preferences, clock=lambda: NOW_MS)

        result = coordinator.run(UNATTENDED, plan)

        assert result is ResultCode.SUCCESS
        mock_preferences.set_last_backup.assert_called_once_with(NOW_MS)
        # Repertoire prepare, aucun fichier ecrit pour les familles vides
        assert plan.auto_backup_root.is_dir()
        assert list(plan.auto_backup_root.iterdir()) == []

    def test_failed_last_backup_stamp_is_generic_error(self, plan, mock_preferences):
        mock_preferences.set_last_backup.side_effect = DataSourceError("database is locked")
        data_source = FakeDataSource(movies=[movie_row()])
        coordinator = ExportCoordinator(data_source, mock_preferences, clock=lambda: NOW_MS)

        result = coordinator.run(UNATTENDED, plan)

        # Fichiers ecrits mais sauvegarde non horodatee
        assert result is ResultCode.GENERIC_ERROR
        assert (plan.auto_backup_root / "st-movies-export.json").exists()
        mock_preferences.set_last_backup.assert_called_once_with(NOW_MS)

    def test_missing_volume_is_file_access_error(self, tmp_path, mock_preferences):
        plan = DestinationPlan(
            volume_root=tmp_path / "absent",
            export_root=tmp_path / "absent" / "SerieTrack",
            auto_backup_root=tmp_path / "absent" / "SerieTrack" / "AutoBackup",
        )
        data_source = FakeDataSource(movies=[movie_row()])
        coordinator = ExportCoordinator(data_source, mock_preferences)

        result = coordinator.run(UNATTENDED, plan)

        assert result is ResultCode.FILE_ACCESS_ERROR
        assert data_source.opened == []
        mock_preferences.set_last_backup.assert_not_called()


# ============================================================================
# Annulation
# ============================================================================


class TestCancellation:
    """Annulation cooperative."""

    def test_cancelled_before_start(self, fixed_plan, mock_preferences):
        data_source = FakeDataSource(shows=[show_row()])
        token = CancellationToken()
        token.cancel()

        result = ExportCoordinator(data_source, mock_preferences).run(UNATTENDED, fixed_plan, token)

        assert result is ResultCode.CANCELLED
        assert data_source.opened == []
        mock_preferences.set_last_backup.assert_not_called()

    def test_cancelled_during_family(self, plan, mock_preferences):
        data_source = FakeDataSource(
            shows=[show_row(1, "A"), show_row(2, "B"), show_row(3, "C")],
            movies=[movie_row()],
        )
        token = CancellationToken()

        def on_progress(event: ProgressEvent):
            if event.completed == 1:
                token.cancel()

        result = ExportCoordinator(data_source, mock_preferences).run(
            UNATTENDED, plan, token, on_progress
        )

        assert result is ResultCode.CANCELLED
        # Tableau tronque mais valide, familles suivantes non tentees
        shows = _read_json(plan.auto_backup_root / "st-shows-export.json")
        assert [s["tvdb_id"] for s in shows] == [1]
        assert not (plan.auto_backup_root / "st-movies-export.json").exists()
        mock_preferences.set_last_backup.assert_not_called()

    def test_cancelled_after_last_show(self, plan, mock_preferences):
        """Une annulation apres la derniere serie arrete avant les familles suivantes."""
        data_source = FakeDataSource(
            shows=[show_row(1, "A"), show_row(2, "B")],
            movies=[movie_row()],
        )
        token = CancellationToken()

        def on_progress(event: ProgressEvent):
            if event.family is ExportFamily.SHOWS and event.completed == event.total:
                token.cancel()

        result = ExportCoordinator(data_source, mock_preferences).run(
            UNATTENDED, plan, token, on_progress
        )

        assert result is ResultCode.CANCELLED
        shows = _read_json(plan.auto_backup_root / "st-shows-export.json")
        assert [s["tvdb_id"] for s in shows] == [1, 2]
        assert "lists" not in data_source.queries
        assert "movies" not in data_source.queries
        assert not (plan.auto_backup_root / "st-movies-export.json").exists()
        mock_preferences.set_last_backup.assert_not_called()


# ============================================================================
# Erreurs
# ============================================================================


class TestErrors:
    """Traduction des erreurs en resultat."""

    def test_unreadable_family_is_generic_error(self, fixed_plan, mock_preferences):
        data_source = FakeDataSource(shows=DataSourceError("base verrouillee"))

        result = ExportCoordinator(data_source, mock_preferences).run(INTERACTIVE, fixed_plan)

        assert result is ResultCode.GENERIC_ERROR

    def test_non_finite_value_is_generic_error(self, fixed_plan, mock_preferences):
        data_source = FakeDataSource(shows=[show_row(rating_global=float("nan"))])

        result = ExportCoordinator(data_source, mock_preferences).run(
            ExportMode(full_dump=True), fixed_plan
        )

        assert result is ResultCode.GENERIC_ERROR
        mock_preferences.store_destination_handle.assert_not_called()

    def test_unexpected_error_is_generic_error(self, fixed_plan, mock_preferences):
        data_source = MagicMock()
        data_source.query_shows.side_effect = RuntimeError("boom")

        result = ExportCoordinator(data_source, mock_preferences).run(UNATTENDED, fixed_plan)

        assert result is ResultCode.GENERIC_ERROR
        mock_preferences.set_last_backup.assert_not_called()


# ============================================================================
# Progression
# ============================================================================


def test_progress_events(fixed_plan, mock_preferences):
    data_source = FakeDataSource(
        shows=[show_row(1, "A"), show_row(2, "B")],
        movies=[movie_row()],
    )
    events: list[ProgressEvent] = []

    ExportCoordinator(data_source, mock_preferences).run(
        INTERACTIVE, fixed_plan, on_progress=events.append
    )

    assert [(e.family, e.total, e.completed) for e in events] == [
        (ExportFamily.SHOWS, 2, 0),
        (ExportFamily.SHOWS, 2, 1),
        (ExportFamily.SHOWS, 2, 2),
        (ExportFamily.MOVIES, 1, 0),
        (ExportFamily.MOVIES, 1, 1),
    ]
