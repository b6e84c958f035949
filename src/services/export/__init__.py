"""
Pipeline d'export JSON (sauvegarde) de la base de suivi.

Modules:
- coordinator : Orchestration des familles, annulation, resultat terminal
- destinations : Choix et preparation des destinations (chemin fixe / handle)
- serializers : Ecriture en flux d'un tableau JSON par famille
- cancellation : Jeton d'annulation cooperative
- task : Execution dans une tache de fond, pont asyncio
"""

from src.services.export.cancellation import CancellationToken
from src.services.export.coordinator import ExportCoordinator, ExportRunContext
from src.services.export.destinations import (
    DestinationPlan,
    DestinationResolver,
    DestinationStrategy,
    get_export_path,
)
from src.services.export.serializers import (
    SERIALIZERS,
    FamilySerializer,
    JsonArrayWriter,
    ListSerializer,
    MovieSerializer,
    SerializeResult,
    ShowSerializer,
)
from src.services.export.task import ExportTask, run_export_async

__all__ = [
    "CancellationToken",
    "DestinationPlan",
    "DestinationResolver",
    "DestinationStrategy",
    "ExportCoordinator",
    "ExportRunContext",
    "ExportTask",
    "FamilySerializer",
    "JsonArrayWriter",
    "ListSerializer",
    "MovieSerializer",
    "SERIALIZERS",
    "SerializeResult",
    "ShowSerializer",
    "get_export_path",
    "run_export_async",
]
