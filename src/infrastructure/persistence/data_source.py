"""
Implementation SQLModel de la source de donnees de l'export.

Implemente IExportDataSource : chaque lecture selectionne une projection de
colonnes (reduite ou complete), triee selon l'ordre canonique de la famille,
et retourne un RowSet dont le nombre de lignes est connu avant le parcours.
"""

from collections.abc import Iterator
from typing import Any, Optional

from loguru import logger
from sqlalchemy import func
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from src.core.errors import DataSourceError
from src.core.ports.data_source import IExportDataSource, Row, RowSet
from src.infrastructure.persistence.models import (
    EpisodeModel,
    ListItemModel,
    ListModel,
    MovieModel,
    SeasonModel,
    ShowModel,
)

SHOW_COLUMNS = (
    ShowModel.id,
    ShowModel.title,
    ShowModel.favorite,
    ShowModel.hidden,
    ShowModel.release_time,
    ShowModel.release_weekday,
    ShowModel.release_timezone,
    ShowModel.release_country,
    ShowModel.last_watched_id,
    ShowModel.poster,
    ShowModel.content_rating,
    ShowModel.status,
    ShowModel.runtime,
    ShowModel.network,
    ShowModel.imdb_id,
    ShowModel.first_release,
    ShowModel.rating_user,
)
SHOW_COLUMNS_FULL = SHOW_COLUMNS + (
    ShowModel.overview,
    ShowModel.rating_global,
    ShowModel.rating_votes,
    ShowModel.genres,
    ShowModel.actors,
    ShowModel.last_updated,
    ShowModel.last_edited,
)

EPISODE_COLUMNS = (
    EpisodeModel.id,
    EpisodeModel.number,
    EpisodeModel.absolute_number,
    EpisodeModel.watched,
    EpisodeModel.collected,
    EpisodeModel.title,
    EpisodeModel.first_aired_ms,
    EpisodeModel.imdb_id,
    EpisodeModel.dvd_number,
    EpisodeModel.rating_user,
)
EPISODE_COLUMNS_FULL = EPISODE_COLUMNS + (
    EpisodeModel.overview,
    EpisodeModel.image,
    EpisodeModel.writers,
    EpisodeModel.guest_stars,
    EpisodeModel.directors,
    EpisodeModel.rating_global,
    EpisodeModel.rating_votes,
    EpisodeModel.last_edited,
)

MOVIE_COLUMNS = (
    MovieModel.tmdb_id,
    MovieModel.imdb_id,
    MovieModel.title,
    MovieModel.released_utc_ms,
    MovieModel.runtime_min,
    MovieModel.poster,
    MovieModel.in_collection,
    MovieModel.in_watchlist,
    MovieModel.watched,
)
MOVIE_COLUMNS_FULL = MOVIE_COLUMNS + (MovieModel.overview,)


class SQLRowSet(RowSet):
    """RowSet adosse a un resultat SQLAlchemy, parcouru a la demande."""

    def __init__(self, count: int, result: Result) -> None:
        self._count = count
        self._result = result
        self._closed = False

    @property
    def count(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Row]:
        try:
            yield from self._result.mappings()
        except SQLAlchemyError as e:
            raise DataSourceError(f"Lecture interrompue: {e}") from e

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._result.close()


class SQLModelExportDataSource(IExportDataSource):
    """
    Source de donnees SQLModel pour l'export.

    Les requetes imbriquees (saisons d'une serie, episodes d'une saison,
    elements d'une liste) utilisent la meme session que la requete
    de premier niveau.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise la source de donnees avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les lectures
        """
        self._session = session

    def _open(self, statement: Any, label: str) -> SQLRowSet:
        """Compte puis execute la requete, en traduisant les erreurs SQL."""
        try:
            count_statement = select(func.count()).select_from(
                statement.order_by(None).subquery()
            )
            count = self._session.exec(count_statement).one()
            result = self._session.exec(statement)
        except SQLAlchemyError as e:
            logger.debug(f"Requete {label} en echec: {e}")
            raise DataSourceError(f"Requete {label} impossible: {e}") from e
        return SQLRowSet(count, result)

    def query_shows(self, full_dump: bool) -> RowSet:
        columns = SHOW_COLUMNS_FULL if full_dump else SHOW_COLUMNS
        statement = select(*columns).order_by(func.lower(ShowModel.title), ShowModel.id)
        return self._open(statement, "shows")

    def query_seasons(self, show_id: int) -> RowSet:
        statement = (
            select(SeasonModel.id, SeasonModel.number)
            .where(SeasonModel.show_id == show_id)
            .order_by(SeasonModel.number, SeasonModel.id)
        )
        return self._open(statement, "seasons")

    def query_episodes(self, season_id: int, full_dump: bool) -> RowSet:
        columns = EPISODE_COLUMNS_FULL if full_dump else EPISODE_COLUMNS
        statement = (
            select(*columns)
            .where(EpisodeModel.season_id == season_id)
            .order_by(EpisodeModel.number, EpisodeModel.id)
        )
        return self._open(statement, "episodes")

    def query_lists(self) -> RowSet:
        statement = select(ListModel.list_id, ListModel.name, ListModel.sort_order).order_by(
            ListModel.sort_order, func.lower(ListModel.name)
        )
        return self._open(statement, "lists")

    def query_list_items(self, list_id: str) -> RowSet:
        statement = (
            select(
                ListItemModel.list_item_id,
                ListItemModel.list_id,
                ListItemModel.item_ref_id,
                ListItemModel.item_type,
            )
            .where(ListItemModel.list_id == list_id)
            .order_by(ListItemModel.id)
        )
        return self._open(statement, "list_items")

    def query_movies(self, full_dump: bool) -> RowSet:
        columns = MOVIE_COLUMNS_FULL if full_dump else MOVIE_COLUMNS
        statement = select(*columns).order_by(func.lower(MovieModel.title), MovieModel.tmdb_id)
        return self._open(statement, "movies")


def count_rows(data_source: IExportDataSource, full_dump: bool = False) -> dict[str, Optional[int]]:
    """
    Compte les lignes de premier niveau de chaque famille.

    Utilise par la commande info ; une famille illisible vaut None.
    """
    counts: dict[str, Optional[int]] = {}
    for name, query in (
        ("shows", lambda: data_source.query_shows(full_dump)),
        ("lists", data_source.query_lists),
        ("movies", lambda: data_source.query_movies(full_dump)),
    ):
        try:
            with query() as rows:
                counts[name] = rows.count
        except DataSourceError:
            counts[name] = None
    return counts
