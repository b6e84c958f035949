"""
Tests unitaires pour les entites d'export.

Tests couvrant:
- Decodage du statut de serie
- Codage/decodage de l'etat vu/passe des episodes
- Decodage des types d'elements de liste
- Conversion en dictionnaire JSON (export complet / reduit)
"""

import pytest

from src.core.entities.export import (
    EpisodeFlag,
    ExportEpisode,
    ExportList,
    ExportListItem,
    ExportMovie,
    ExportSeason,
    ExportShow,
    ShowStatus,
    decode_list_item_type,
    decode_show_status,
    encode_episode_flag,
    is_skipped,
    is_watched,
    to_export_dict,
)

SHOW_FULL_ONLY = {"overview", "rating", "rating_votes", "genres", "actors", "last_updated", "last_edited"}
EPISODE_FULL_ONLY = {
    "overview", "image", "writers", "gueststars", "directors", "rating", "rating_votes", "last_edited",
}


def _episode(**overrides) -> ExportEpisode:
    values = dict(
        tvdb_id=349232,
        episode=1,
        episode_absolute=1,
        episode_dvd=1.0,
        watched=True,
        skipped=False,
        collected=False,
        title="Pilot",
        first_aired=1200787200000,
        imdb_id=None,
        rating_user=0,
    )
    values.update(overrides)
    return ExportEpisode(**values)


def _show(**overrides) -> ExportShow:
    values = dict(
        tvdb_id=81189,
        title="Breaking Bad",
        favorite=True,
        hidden=False,
        release_time=2100,
        release_weekday=7,
        release_timezone="America/New_York",
        country="us",
        last_watched_episode=349232,
        poster=None,
        content_rating="TV-MA",
        status=ShowStatus.ENDED,
        runtime=45,
        network="AMC",
        imdb_id="tt0903747",
        first_aired="2008-01-20",
        rating_user=9,
    )
    values.update(overrides)
    return ExportShow(**values)


class TestDecoders:
    """Tests des tables de decodage."""

    @pytest.mark.parametrize(
        "code,expected",
        [(1, ShowStatus.CONTINUING), (0, ShowStatus.ENDED), (-1, ShowStatus.UNKNOWN), (None, ShowStatus.UNKNOWN)],
    )
    def test_decode_show_status(self, code, expected):
        assert decode_show_status(code) is expected

    def test_episode_flag_watched(self):
        assert is_watched(EpisodeFlag.WATCHED)
        assert not is_skipped(EpisodeFlag.WATCHED)

    def test_episode_flag_skipped(self):
        assert is_skipped(2)
        assert not is_watched(2)

    def test_episode_flag_unwatched(self):
        assert not is_watched(0)
        assert not is_skipped(0)

    @pytest.mark.parametrize("watched,skipped", [(True, False), (False, True), (False, False)])
    def test_encode_matches_decode(self, watched, skipped):
        """Le codage est l'inverse exact du decodage."""
        flag = encode_episode_flag(watched, skipped)
        assert is_watched(flag) is watched
        assert is_skipped(flag) is skipped

    def test_encode_watched_wins_over_skipped(self):
        assert encode_episode_flag(True, True) == EpisodeFlag.WATCHED

    @pytest.mark.parametrize("code,expected", [(1, "show"), (2, "season"), (3, "episode")])
    def test_decode_list_item_type(self, code, expected):
        assert decode_list_item_type(code) == expected

    @pytest.mark.parametrize("code", [0, 4, 9, None])
    def test_decode_unknown_list_item_type(self, code):
        assert decode_list_item_type(code) is None


class TestToExportDict:
    """Tests de la conversion en dictionnaire JSON."""

    def test_reduced_show_omits_full_only_fields(self):
        payload = to_export_dict(_show(overview="Chimie", rating=9.3), full_dump=False)

        assert SHOW_FULL_ONLY.isdisjoint(payload)
        assert payload["tvdb_id"] == 81189
        assert payload["status"] == "ended"
        assert payload["seasons"] == []

    def test_full_show_has_every_field(self):
        payload = to_export_dict(_show(), full_dump=True)

        assert SHOW_FULL_ONLY <= set(payload)
        # Present meme non renseigne
        assert payload["overview"] is None

    def test_nested_children_follow_mode(self):
        show = _show(seasons=[ExportSeason(tvdb_id=1, season=1, episodes=[_episode(writers="V. Gilligan")])])

        reduced = to_export_dict(show, full_dump=False)
        full = to_export_dict(show, full_dump=True)

        reduced_episode = reduced["seasons"][0]["episodes"][0]
        assert EPISODE_FULL_ONLY.isdisjoint(reduced_episode)
        assert full["seasons"][0]["episodes"][0]["writers"] == "V. Gilligan"

    def test_key_order_follows_declaration(self):
        payload = to_export_dict(_show(), full_dump=False)
        keys = list(payload)
        assert keys[0] == "tvdb_id"
        assert keys[-1] == "seasons"

    def test_list_with_items(self):
        export_list = ExportList(
            list_id="l-1",
            name="A voir",
            order=2,
            items=[ExportListItem(list_item_id="1-1-l-1", tvdb_id=1, type="show")],
        )

        payload = to_export_dict(export_list, full_dump=False)

        assert payload == {
            "list_id": "l-1",
            "name": "A voir",
            "order": 2,
            "items": [{"list_item_id": "1-1-l-1", "tvdb_id": 1, "type": "show"}],
        }

    def test_movie_overview_full_only(self):
        movie = ExportMovie(
            tmdb_id=19995,
            imdb_id="tt0499549",
            title="Avatar",
            released_utc_ms=1261094400000,
            runtime_min=162,
            poster=None,
            in_collection=True,
            in_watchlist=False,
            watched=True,
            overview="Pandora",
        )

        assert "overview" not in to_export_dict(movie, full_dump=False)
        assert to_export_dict(movie, full_dump=True)["overview"] == "Pandora"
