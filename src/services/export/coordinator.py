"""
Service d'orchestration de l'export JSON.

Ce service execute les familles dans un ordre fixe :
- Series (avec saisons et episodes)
- Listes (avec leurs elements)
- Films

L'annulation est observee avant de commencer, entre deux familles et entre
deux lignes. Le premier echec d'une famille interrompt l'execution et
devient le resultat ; une famille vide reussit sans toucher a sa destination.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from src.core.errors import DataSourceError, FileAccessError, MalformedDataError
from src.core.ports.data_source import IExportDataSource
from src.core.ports.destination import IDestination
from src.core.ports.preferences import IPreferenceStore
from src.core.value_objects import (
    EXPORT_ORDER,
    ExportFamily,
    ExportMode,
    ProgressEvent,
    ResultCode,
)
from src.services.export.cancellation import CancellationToken
from src.services.export.destinations import DestinationPlan, DestinationResolver
from src.services.export.serializers import SERIALIZERS

ProgressListener = Callable[[ProgressEvent], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class ExportRunContext:
    """Etat d'une execution, possede par le coordinateur et transmis aux etapes."""

    mode: ExportMode
    resolver: DestinationResolver
    token: CancellationToken = field(default_factory=CancellationToken)
    on_progress: Optional[ProgressListener] = None

    def report(self, family: ExportFamily, total: int, completed: int) -> None:
        if self.on_progress is not None:
            self.on_progress(ProgressEvent(family=family, total=total, completed=completed))


class ExportCoordinator:
    """
    Coordinateur d'une execution d'export.

    Utilisation typique:
        coordinator = ExportCoordinator(data_source, preferences)
        result = coordinator.run(ExportMode(full_dump=True), DestinationPlan.from_settings(settings))
    """

    def __init__(
        self,
        data_source: IExportDataSource,
        preferences: IPreferenceStore,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """
        Initialise le coordinateur.

        Args:
            data_source: Source de donnees de la base de suivi
            preferences: Stockage des preferences (derniere sauvegarde, handles)
            clock: Horloge en ms depuis epoch (injectable pour les tests)
        """
        self._data_source = data_source
        self._preferences = preferences
        self._clock = clock

    def run(
        self,
        mode: ExportMode,
        plan: DestinationPlan,
        token: Optional[CancellationToken] = None,
        on_progress: Optional[ProgressListener] = None,
    ) -> ResultCode:
        """
        Execute l'export complet et retourne le resultat terminal.

        En mode automatique, l'horodatage de derniere sauvegarde n'est
        enregistre qu'en cas de succes complet ; un echec de cet
        enregistrement rend GENERIC_ERROR.
        """
        context = ExportRunContext(
            mode=mode,
            resolver=DestinationResolver(plan, self._preferences),
            token=token or CancellationToken(),
            on_progress=on_progress,
        )
        logger.info(
            "Debut de l'export",
            full_dump=mode.full_dump,
            unattended=mode.unattended,
        )
        try:
            result = self._run_families(context)
        except Exception as e:
            logger.exception(f"Erreur inattendue lors de l'export: {e}")
            result = ResultCode.GENERIC_ERROR

        if result is ResultCode.SUCCESS and mode.unattended:
            result = self._record_last_backup()

        logger.info(f"Fin de l'export: {result.value}")
        return result

    def _record_last_backup(self) -> ResultCode:
        """Horodate la sauvegarde ; sans horodatage, la sauvegarde compte comme echouee."""
        try:
            self._preferences.set_last_backup(self._clock())
        except Exception as e:
            logger.exception(f"Horodatage de la sauvegarde impossible: {e}")
            return ResultCode.GENERIC_ERROR
        return ResultCode.SUCCESS

    def _run_families(self, context: ExportRunContext) -> ResultCode:
        if context.token.is_cancelled:
            return ResultCode.CANCELLED

        try:
            context.resolver.prepare(context.mode)
        except FileAccessError as e:
            logger.error(f"Repertoire d'export inutilisable: {e}")
            return ResultCode.FILE_ACCESS_ERROR

        for family in EXPORT_ORDER:
            if context.token.is_cancelled:
                logger.info(f"Export annule avant {family.value}")
                return ResultCode.CANCELLED
            result = self._export_family(family, context)
            if result is not ResultCode.SUCCESS:
                return result
        return ResultCode.SUCCESS

    def _export_family(self, family: ExportFamily, context: ExportRunContext) -> ResultCode:
        """Exporte une famille ; la destination est invalidee apres un echec d'E/S."""
        serializer = SERIALIZERS[family](self._data_source, context.mode.full_dump)
        failed_destination: Optional[IDestination] = None

        try:
            rows = serializer.open_rows()
        except DataSourceError as e:
            logger.error(f"Lecture des {family.value} impossible: {e}")
            return ResultCode.GENERIC_ERROR

        with rows:
            total = rows.count
            logger.debug(f"Export {family.value}: {total} element(s)")
            if total == 0:
                return ResultCode.SUCCESS

            context.report(family, total, 0)

            try:
                destination = context.resolver.resolve(family, context.mode)
            except FileAccessError as e:
                logger.error(str(e))
                return ResultCode.FILE_ACCESS_ERROR

            try:
                sink = destination.open_for_write()
                outcome = serializer.serialize(
                    sink,
                    rows,
                    token=context.token,
                    on_progress=lambda t, c: context.report(family, t, c),
                )
            except FileAccessError as e:
                logger.opt(exception=e).error(f"Ecriture des {family.value} impossible")
                failed_destination = destination
                result = ResultCode.FILE_ACCESS_ERROR
            except MalformedDataError as e:
                logger.opt(exception=e).error(f"Export JSON des {family.value} impossible")
                result = ResultCode.GENERIC_ERROR
            except DataSourceError as e:
                logger.opt(exception=e).error(f"Lecture des {family.value} interrompue")
                result = ResultCode.GENERIC_ERROR
            else:
                result = ResultCode.CANCELLED if outcome.cancelled else ResultCode.SUCCESS

        # Le curseur est ferme avant d'ecrire dans les preferences
        if failed_destination is not None:
            failed_destination.invalidate()
        return result
