"""
Entites d'export representant les concepts du domaine.

Entites transitoires construites ligne par ligne pendant un export :
- ExportShow : Serie suivie, avec ses saisons (ExportSeason) et episodes (ExportEpisode)
- ExportList : Liste utilisateur, avec ses elements (ExportListItem)
- ExportMovie : Film suivi
"""

from src.core.entities.export import (
    EpisodeFlag,
    ExportEpisode,
    ExportList,
    ExportListItem,
    ExportMovie,
    ExportSeason,
    ExportShow,
    ListItemType,
    ShowStatus,
    decode_list_item_type,
    decode_show_status,
    encode_episode_flag,
    is_skipped,
    is_watched,
    to_export_dict,
)

__all__ = [
    "EpisodeFlag",
    "ExportEpisode",
    "ExportList",
    "ExportListItem",
    "ExportMovie",
    "ExportSeason",
    "ExportShow",
    "ListItemType",
    "ShowStatus",
    "decode_list_item_type",
    "decode_show_status",
    "encode_episode_flag",
    "is_skipped",
    "is_watched",
    "to_export_dict",
]
