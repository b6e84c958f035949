"""
Objets valeur du domaine.

Objets immutables definis par leurs attributs plutot que par une identite :
- ExportFamily : famille de donnees exportee (series, listes, films)
- ExportMode : taille (complete/reduite) et execution (interactive/automatique)
- ResultCode : resultat terminal d'une execution
- ProgressEvent : progression (total, completed) d'une famille
"""

from src.core.value_objects.export import (
    EXPORT_ORDER,
    ExportFamily,
    ExportMode,
    ProgressEvent,
    ResultCode,
)

__all__ = [
    "EXPORT_ORDER",
    "ExportFamily",
    "ExportMode",
    "ProgressEvent",
    "ResultCode",
]
