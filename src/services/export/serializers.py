"""
Serialiseurs de familles : ecriture en flux d'un tableau JSON par famille.

Chaque ligne de premier niveau est entierement materialisee (avec ses enfants)
avant d'etre ecrite : un element du tableau n'est jamais ecrit partiellement.
En cas d'annulation, le tableau est ferme apres le dernier element complet.

Lectures imbriquees :
- series : une requete de saisons par serie, une requete d'episodes par saison
- listes : une requete d'elements par liste
Un echec de lecture imbriquee est absorbe : l'entite est exportee sans
les enfants concernes.
"""

import io
import json
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, BinaryIO, Optional

from loguru import logger

from src.core.entities.export import (
    ExportEpisode,
    ExportList,
    ExportListItem,
    ExportMovie,
    ExportSeason,
    ExportShow,
    decode_list_item_type,
    decode_show_status,
    is_skipped,
    is_watched,
    to_export_dict,
)
from src.core.errors import DataSourceError, FileAccessError, MalformedDataError
from src.core.ports.data_source import IExportDataSource, Row, RowSet
from src.core.value_objects import ExportFamily
from src.services.export.cancellation import CancellationToken

# (total, completed)
ProgressCallback = Callable[[int, int], None]


def _int(row: Row, key: str) -> int:
    value = row[key]
    return int(value) if value is not None else 0


def _float(row: Row, key: str) -> float:
    value = row[key]
    return float(value) if value is not None else 0.0


def _bool(row: Row, key: str) -> bool:
    return row[key] == 1


class JsonArrayWriter:
    """
    Ecrit un tableau JSON element par element sur un flux binaire UTF-8.

    Toute erreur d'E/S est traduite en FileAccessError, toute valeur non
    serialisable (flottant non fini, type inconnu) en MalformedDataError.
    """

    def __init__(self, sink: BinaryIO) -> None:
        self._stream = io.TextIOWrapper(sink, encoding="utf-8", newline="")
        self._count = 0
        self._opened = False
        self._ended = False

    @property
    def count(self) -> int:
        return self._count

    def _write(self, text: str) -> None:
        try:
            self._stream.write(text)
        except OSError as e:
            raise FileAccessError(f"Ecriture impossible: {e}") from e

    def begin(self) -> None:
        self._write("[")
        self._opened = True

    def write_value(self, payload: dict[str, Any]) -> None:
        try:
            text = json.dumps(
                payload, ensure_ascii=False, allow_nan=False, separators=(",", ":")
            )
        except (TypeError, ValueError) as e:
            raise MalformedDataError(f"Valeur non serialisable: {e}") from e
        self._write("," + text if self._count else text)
        self._count += 1

    def end(self) -> None:
        self._write("]")
        self._ended = True

    def close(self) -> None:
        """Ferme le tableau s'il est ouvert, puis le flux."""
        try:
            if self._opened and not self._ended:
                self.end()
            self._stream.flush()
        except OSError as e:
            raise FileAccessError(f"Ecriture impossible: {e}") from e
        finally:
            try:
                self._stream.close()
            except OSError as e:
                raise FileAccessError(f"Fermeture impossible: {e}") from e

    def abort(self) -> None:
        """Fermeture sur chemin d'erreur : l'erreur d'origine reste prioritaire."""
        try:
            self.close()
        except FileAccessError as e:
            logger.debug(f"Fermeture apres erreur incomplete: {e}")


@dataclass(frozen=True)
class SerializeResult:
    """Resultat de la serialisation d'une famille."""

    total: int
    exported: int
    cancelled: bool = False


class FamilySerializer(ABC):
    """
    Serialiseur d'une famille d'export.

    Les sous-classes fournissent la requete de premier niveau (open_rows)
    et la construction d'une entite a partir d'une ligne (build_entity).
    """

    family: ExportFamily

    def __init__(self, data_source: IExportDataSource, full_dump: bool = False) -> None:
        self._data_source = data_source
        self._full_dump = full_dump

    @abstractmethod
    def open_rows(self) -> RowSet:
        """Ouvre la requete de premier niveau. Leve DataSourceError."""
        ...

    @abstractmethod
    def build_entity(self, row: Row) -> Any:
        """Materialise l'entite (et ses enfants) d'une ligne."""
        ...

    def serialize(
        self,
        sink: BinaryIO,
        rows: RowSet,
        token: Optional[CancellationToken] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SerializeResult:
        """
        Ecrit toutes les lignes dans un tableau JSON sur le flux.

        Le flux est ferme sur tous les chemins. Leve FileAccessError,
        MalformedDataError ou DataSourceError (lecture de premier niveau).
        """
        total = rows.count
        writer = JsonArrayWriter(sink)
        cancelled = False
        try:
            writer.begin()
            for row in rows:
                if token is not None and token.is_cancelled:
                    cancelled = True
                    break
                entity = self.build_entity(row)
                writer.write_value(to_export_dict(entity, self._full_dump))
                if on_progress is not None:
                    on_progress(total, writer.count)
        except BaseException:
            writer.abort()
            raise
        writer.close()

        if cancelled:
            logger.info(f"Export {self.family.value} annule apres {writer.count}/{total}")
        return SerializeResult(total=total, exported=writer.count, cancelled=cancelled)


class ShowSerializer(FamilySerializer):
    """Series, avec saisons puis episodes (deux niveaux de requetes imbriquees)."""

    family = ExportFamily.SHOWS

    def open_rows(self) -> RowSet:
        return self._data_source.query_shows(self._full_dump)

    def build_entity(self, row: Row) -> ExportShow:
        show = ExportShow(
            tvdb_id=_int(row, "id"),
            title=row["title"],
            favorite=_bool(row, "favorite"),
            hidden=_bool(row, "hidden"),
            release_time=_int(row, "release_time"),
            release_weekday=_int(row, "release_weekday"),
            release_timezone=row["release_timezone"],
            country=row["release_country"],
            last_watched_episode=_int(row, "last_watched_id"),
            poster=row["poster"],
            content_rating=row["content_rating"],
            status=decode_show_status(row["status"]),
            runtime=_int(row, "runtime"),
            network=row["network"],
            imdb_id=row["imdb_id"],
            first_aired=row["first_release"],
            rating_user=_int(row, "rating_user"),
        )
        if self._full_dump:
            show.overview = row["overview"]
            show.rating = _float(row, "rating_global")
            show.rating_votes = _int(row, "rating_votes")
            show.genres = row["genres"]
            show.actors = row["actors"]
            show.last_updated = _int(row, "last_updated")
            show.last_edited = _int(row, "last_edited")

        show.seasons = self._read_seasons(show.tvdb_id)
        return show

    def _read_seasons(self, show_id: int) -> list[ExportSeason]:
        seasons: list[ExportSeason] = []
        try:
            with self._data_source.query_seasons(show_id) as rows:
                for row in rows:
                    season = ExportSeason(tvdb_id=_int(row, "id"), season=_int(row, "number"))
                    season.episodes = self._read_episodes(season.tvdb_id)
                    seasons.append(season)
        except DataSourceError as e:
            logger.warning(f"Saisons de la serie {show_id} ignorees: {e}")
            # Liste partielle abandonnee : une serie garde toutes ses saisons ou aucune
            return []
        return seasons

    def _read_episodes(self, season_id: int) -> list[ExportEpisode]:
        episodes: list[ExportEpisode] = []
        try:
            with self._data_source.query_episodes(season_id, self._full_dump) as rows:
                for row in rows:
                    episodes.append(self._build_episode(row))
        except DataSourceError as e:
            logger.warning(f"Episodes de la saison {season_id} ignores: {e}")
            return []
        return episodes

    def _build_episode(self, row: Row) -> ExportEpisode:
        flag = row["watched"]
        episode = ExportEpisode(
            tvdb_id=_int(row, "id"),
            episode=_int(row, "number"),
            episode_absolute=_int(row, "absolute_number"),
            episode_dvd=_float(row, "dvd_number"),
            watched=is_watched(flag),
            skipped=is_skipped(flag),
            collected=_bool(row, "collected"),
            title=row["title"],
            first_aired=_int(row, "first_aired_ms"),
            imdb_id=row["imdb_id"],
            rating_user=_int(row, "rating_user"),
        )
        if self._full_dump:
            episode.overview = row["overview"]
            episode.image = row["image"]
            episode.writers = row["writers"]
            episode.gueststars = row["guest_stars"]
            episode.directors = row["directors"]
            episode.rating = _float(row, "rating_global")
            episode.rating_votes = _int(row, "rating_votes")
            episode.last_edited = _int(row, "last_edited")
        return episode


class ListSerializer(FamilySerializer):
    """Listes utilisateur, avec leurs elements."""

    family = ExportFamily.LISTS

    def open_rows(self) -> RowSet:
        return self._data_source.query_lists()

    def build_entity(self, row: Row) -> ExportList:
        export_list = ExportList(
            list_id=row["list_id"],
            name=row["name"],
            order=_int(row, "sort_order"),
        )
        export_list.items = self._read_items(export_list.list_id)
        return export_list

    def _read_items(self, list_id: str) -> list[ExportListItem]:
        items: list[ExportListItem] = []
        try:
            with self._data_source.query_list_items(list_id) as rows:
                for row in rows:
                    item_type = decode_list_item_type(row["item_type"])
                    if item_type is None:
                        logger.warning(
                            f"Element {row['list_item_id']} ignore: type inconnu {row['item_type']}"
                        )
                        continue
                    items.append(
                        ExportListItem(
                            list_item_id=row["list_item_id"],
                            tvdb_id=_int(row, "item_ref_id"),
                            type=item_type,
                        )
                    )
        except DataSourceError as e:
            logger.warning(f"Elements de la liste {list_id} ignores: {e}")
            return []
        return items


class MovieSerializer(FamilySerializer):
    """Films suivis."""

    family = ExportFamily.MOVIES

    def open_rows(self) -> RowSet:
        return self._data_source.query_movies(self._full_dump)

    def build_entity(self, row: Row) -> ExportMovie:
        movie = ExportMovie(
            tmdb_id=_int(row, "tmdb_id"),
            imdb_id=row["imdb_id"],
            title=row["title"],
            released_utc_ms=_int(row, "released_utc_ms"),
            runtime_min=_int(row, "runtime_min"),
            poster=row["poster"],
            in_collection=_bool(row, "in_collection"),
            in_watchlist=_bool(row, "in_watchlist"),
            watched=_bool(row, "watched"),
        )
        if self._full_dump:
            movie.overview = row["overview"]
        return movie


SERIALIZERS: dict[ExportFamily, type[FamilySerializer]] = {
    ExportFamily.SHOWS: ShowSerializer,
    ExportFamily.LISTS: ListSerializer,
    ExportFamily.MOVIES: MovieSerializer,
}
