"""
Entites d'export (sauvegarde JSON).

Ces entites sont transitoires : construites a partir d'une ligne du data source,
serialisees puis oubliees. Elles n'existent que le temps d'une passe d'export.

Les champs marques full_only ne sont emis qu'en export complet ; en export reduit
ils sont absents du JSON (et non pas emis a null).
"""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum, IntEnum
from typing import Any, Optional

_FULL_ONLY = "full_only"


def full_only() -> Any:
    """Declare un champ present uniquement dans l'export complet."""
    return field(default=None, metadata={_FULL_ONLY: True})


class ShowStatus(str, Enum):
    """Statut de diffusion d'une serie tel qu'exporte."""

    CONTINUING = "continuing"
    ENDED = "ended"
    UNKNOWN = "unknown"


def decode_show_status(code: Optional[int]) -> ShowStatus:
    """Decode le code de statut stocke (1 = en cours, 0 = terminee)."""
    if code == 1:
        return ShowStatus.CONTINUING
    if code == 0:
        return ShowStatus.ENDED
    return ShowStatus.UNKNOWN


class EpisodeFlag(IntEnum):
    """Etat de visionnage d'un episode, stocke dans une seule colonne."""

    UNWATCHED = 0
    WATCHED = 1
    SKIPPED = 2


def is_watched(flag: Optional[int]) -> bool:
    return flag == EpisodeFlag.WATCHED


def is_skipped(flag: Optional[int]) -> bool:
    return flag == EpisodeFlag.SKIPPED


def encode_episode_flag(watched: bool, skipped: bool) -> EpisodeFlag:
    """Inverse de is_watched/is_skipped. Vu l'emporte sur passe."""
    if watched:
        return EpisodeFlag.WATCHED
    if skipped:
        return EpisodeFlag.SKIPPED
    return EpisodeFlag.UNWATCHED


class ListItemType(IntEnum):
    """Codes de type des elements de liste dans la base."""

    SHOW = 1
    SEASON = 2
    EPISODE = 3


_LIST_ITEM_EXPORT_TYPES = {
    ListItemType.SHOW: "show",
    ListItemType.SEASON: "season",
    ListItemType.EPISODE: "episode",
}


def decode_list_item_type(code: Optional[int]) -> Optional[str]:
    """Type exporte d'un element de liste, ou None si le code est inconnu."""
    try:
        return _LIST_ITEM_EXPORT_TYPES[ListItemType(code)]
    except ValueError:
        return None


@dataclass
class ExportEpisode:
    """Episode d'une saison."""

    tvdb_id: int
    episode: int
    episode_absolute: int
    episode_dvd: float
    watched: bool
    skipped: bool
    collected: bool
    title: Optional[str]
    first_aired: int  # ms depuis epoch
    imdb_id: Optional[str]
    rating_user: int
    overview: Optional[str] = full_only()
    image: Optional[str] = full_only()
    writers: Optional[str] = full_only()
    gueststars: Optional[str] = full_only()
    directors: Optional[str] = full_only()
    rating: Optional[float] = full_only()
    rating_votes: Optional[int] = full_only()
    last_edited: Optional[int] = full_only()


@dataclass
class ExportSeason:
    """Saison d'une serie, episodes tries par numero."""

    tvdb_id: int
    season: int
    episodes: list[ExportEpisode] = field(default_factory=list)


@dataclass
class ExportShow:
    """
    Serie suivie.

    Attributs principaux:
        tvdb_id: Identifiant de la serie
        release_time: Heure de diffusion (encodee hhmm)
        release_weekday: Jour de diffusion
        last_watched_episode: Identifiant du dernier episode vu
        status: Statut de diffusion (continuing, ended, unknown)
        first_aired: Date de premiere diffusion (chaine opaque)
        genres, actors: Chaines delimitees (export complet uniquement)
        seasons: Saisons triees dans l'ordre du data source
    """

    tvdb_id: int
    title: Optional[str]
    favorite: bool
    hidden: bool
    release_time: int
    release_weekday: int
    release_timezone: Optional[str]
    country: Optional[str]
    last_watched_episode: int
    poster: Optional[str]
    content_rating: Optional[str]
    status: ShowStatus
    runtime: int
    network: Optional[str]
    imdb_id: Optional[str]
    first_aired: Optional[str]
    rating_user: int
    overview: Optional[str] = full_only()
    rating: Optional[float] = full_only()
    rating_votes: Optional[int] = full_only()
    genres: Optional[str] = full_only()
    actors: Optional[str] = full_only()
    last_updated: Optional[int] = full_only()
    last_edited: Optional[int] = full_only()
    seasons: list[ExportSeason] = field(default_factory=list)


@dataclass
class ExportListItem:
    """Element d'une liste : reference vers une serie, une saison ou un episode."""

    list_item_id: str
    tvdb_id: int
    type: str


@dataclass
class ExportList:
    """Liste utilisateur avec ses elements dans l'ordre d'insertion."""

    list_id: str
    name: Optional[str]
    order: int
    items: list[ExportListItem] = field(default_factory=list)


@dataclass
class ExportMovie:
    """Film suivi (identifiants TMDB et IMDb independants)."""

    tmdb_id: int
    imdb_id: Optional[str]
    title: Optional[str]
    released_utc_ms: int
    runtime_min: int
    poster: Optional[str]
    in_collection: bool
    in_watchlist: bool
    watched: bool
    overview: Optional[str] = full_only()


def to_export_dict(entity: Any, full_dump: bool) -> dict[str, Any]:
    """
    Convertit une entite d'export (et ses enfants) en dictionnaire JSON.

    En export reduit, les champs full_only sont omis. Les enums sont
    remplaces par leur valeur.
    """
    payload: dict[str, Any] = {}
    for f in fields(entity):
        if f.metadata.get(_FULL_ONLY) and not full_dump:
            continue
        payload[f.name] = _to_json_value(getattr(entity, f.name), full_dump)
    return payload


def _to_json_value(value: Any, full_dump: bool) -> Any:
    if is_dataclass(value):
        return to_export_dict(value, full_dump)
    if isinstance(value, list):
        return [_to_json_value(item, full_dump) for item in value]
    if isinstance(value, Enum):
        return value.value
    return value
