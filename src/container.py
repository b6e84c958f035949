"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI.
Inclut la source de donnees SQLModel, le stockage des preferences
et le coordinateur d'export.
"""

from dependency_injector import containers, providers

from .config import Settings
from .infrastructure.persistence.data_source import SQLModelExportDataSource
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.preference_store import SQLModelPreferenceStore
from .services.export.coordinator import ExportCoordinator
from .services.export.destinations import DestinationPlan


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        coordinator = container.export_coordinator()
        plan = container.destination_plan()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique, URL issue de la configuration
    database = providers.Resource(
        init_db,
        database_url=config.provided.database_url,
    )

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Adapters de persistance - Factory pour nouvelle instance avec session fraiche
    data_source = providers.Factory(
        SQLModelExportDataSource,
        session=session,
    )
    preference_store = providers.Factory(
        SQLModelPreferenceStore,
        session=session,
    )

    # Parametres de destination derives de la configuration
    destination_plan = providers.Factory(
        DestinationPlan.from_settings,
        settings=config,
    )

    # Coordinateur d'export - Factory car depend de sessions fraiches
    export_coordinator = providers.Factory(
        ExportCoordinator,
        data_source=data_source,
        preferences=preference_store,
    )
