"""
Modeles SQLModel pour la base de suivi SerieTrack.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites d'export (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- shows: Series suivies (identifiant TVDB comme cle primaire)
- seasons: Saisons d'une serie
- episodes: Episodes d'une saison (etat vu/passe code dans watched)
- lists: Listes utilisateur
- list_items: Elements de liste (reference serie/saison/episode)
- movies: Films suivis
- preferences: Preferences persistantes cle/valeur
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field, Index, SQLModel


class ShowModel(SQLModel, table=True):
    """
    Modele representant une serie suivie.

    Les champs genres et actors sont des chaines delimitees par "|".
    """

    __tablename__ = "shows"

    id: int = Field(primary_key=True)  # ID TVDB
    title: str = Field(index=True)
    favorite: bool = Field(default=False)
    hidden: bool = Field(default=False)
    release_time: int = Field(default=-1)  # hhmm, -1 si inconnue
    release_weekday: int = Field(default=-1)
    release_timezone: str | None = None
    release_country: str | None = None
    last_watched_id: int = Field(default=0)
    poster: str | None = None
    content_rating: str | None = None
    status: int = Field(default=-1)  # 1 en cours, 0 terminee
    runtime: int = Field(default=0)
    network: str | None = None
    imdb_id: str | None = None
    first_release: str | None = None
    rating_user: int = Field(default=0)
    overview: str | None = None
    rating_global: float | None = None
    rating_votes: int | None = None
    genres: str | None = None
    actors: str | None = None
    last_updated: int | None = None  # ms depuis epoch
    last_edited: int | None = None


class SeasonModel(SQLModel, table=True):
    """Modele representant une saison, liee a sa serie."""

    __tablename__ = "seasons"

    id: int = Field(primary_key=True)
    show_id: int = Field(foreign_key="shows.id", index=True)
    number: int


class EpisodeModel(SQLModel, table=True):
    """
    Modele representant un episode.

    watched contient l'etat de visionnage code (0 non vu, 1 vu, 2 passe).
    """

    __tablename__ = "episodes"
    __table_args__ = (
        Index("ix_episodes_season_number", "season_id", "number"),
    )

    id: int = Field(primary_key=True)
    season_id: int = Field(foreign_key="seasons.id", index=True)
    show_id: int = Field(foreign_key="shows.id", index=True)
    number: int
    absolute_number: int = Field(default=0)
    dvd_number: float = Field(default=0.0)
    watched: int = Field(default=0)
    collected: bool = Field(default=False)
    title: str | None = None
    first_aired_ms: int = Field(default=-1)
    imdb_id: str | None = None
    rating_user: int = Field(default=0)
    overview: str | None = None
    image: str | None = None
    writers: str | None = None
    guest_stars: str | None = None
    directors: str | None = None
    rating_global: float | None = None
    rating_votes: int | None = None
    last_edited: int | None = None


class ListModel(SQLModel, table=True):
    """Modele representant une liste utilisateur."""

    __tablename__ = "lists"

    list_id: str = Field(primary_key=True)
    name: str = Field(index=True)
    sort_order: int = Field(default=0)


class ListItemModel(SQLModel, table=True):
    """
    Modele representant un element de liste.

    item_type vaut 1 (serie), 2 (saison) ou 3 (episode). L'ordre
    d'insertion est donne par id.
    """

    __tablename__ = "list_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    list_item_id: str = Field(unique=True)
    list_id: str = Field(foreign_key="lists.list_id", index=True)
    item_ref_id: int
    item_type: int


class MovieModel(SQLModel, table=True):
    """Modele representant un film suivi."""

    __tablename__ = "movies"

    id: Optional[int] = Field(default=None, primary_key=True)
    tmdb_id: int = Field(index=True)
    imdb_id: str | None = None
    title: str = Field(index=True)
    released_utc_ms: int = Field(default=0)
    runtime_min: int = Field(default=0)
    poster: str | None = None
    in_collection: bool = Field(default=False)
    in_watchlist: bool = Field(default=False)
    watched: bool = Field(default=False)
    overview: str | None = None


class PreferenceModel(SQLModel, table=True):
    """Preference persistante (cle/valeur texte)."""

    __tablename__ = "preferences"

    key: str = Field(primary_key=True)
    value: str | None = None
