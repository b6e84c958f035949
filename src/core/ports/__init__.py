"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

- IExportDataSource, RowSet : Lecture ordonnée de la base de suivi
- IPreferenceStore : Dernière sauvegarde et fichiers de sauvegarde choisis
- IDestination : Destination d'écriture d'une famille
"""

from src.core.ports.data_source import IExportDataSource, Row, RowSet
from src.core.ports.destination import IDestination
from src.core.ports.preferences import IPreferenceStore

__all__ = [
    "IDestination",
    "IExportDataSource",
    "IPreferenceStore",
    "Row",
    "RowSet",
]
