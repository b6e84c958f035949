"""
Execution de l'export dans une tache de fond dediee.

L'appelant et la tache ne communiquent que par :
- le jeton d'annulation (cancel)
- les evenements de progression, transmis via un dispatcher optionnel
  (ex: loop.call_soon_threadsafe) pour etre executes dans le contexte de l'appelant
- le resultat terminal, livre exactement une fois
"""

import asyncio
import threading
from collections.abc import Callable
from typing import Any, Optional

from loguru import logger

from src.core.value_objects import ExportMode, ProgressEvent, ResultCode
from src.services.export.cancellation import CancellationToken
from src.services.export.coordinator import ExportCoordinator
from src.services.export.destinations import DestinationPlan

Dispatcher = Callable[..., Any]


class ExportTask:
    """
    Tache de fond executant une seule execution d'export.

    Utilisation typique:
        task = ExportTask(coordinator, mode, plan, on_finished=print).start()
        task.cancel()
        result = task.wait()
    """

    def __init__(
        self,
        coordinator: ExportCoordinator,
        mode: ExportMode,
        plan: DestinationPlan,
        on_progress: Optional[Callable[[ProgressEvent], None]] = None,
        on_finished: Optional[Callable[[ResultCode], None]] = None,
        dispatcher: Optional[Dispatcher] = None,
    ) -> None:
        self._coordinator = coordinator
        self._mode = mode
        self._plan = plan
        self._on_progress = on_progress
        self._on_finished = on_finished
        self._dispatcher = dispatcher
        self._token = CancellationToken()
        self._result: Optional[ResultCode] = None
        self._done = threading.Event()
        self._thread = threading.Thread(target=self._run, name="serietrack-export", daemon=True)

    @property
    def result(self) -> Optional[ResultCode]:
        """Resultat terminal, ou None tant que la tache tourne."""
        return self._result

    def start(self) -> "ExportTask":
        self._thread.start()
        return self

    def cancel(self) -> None:
        """Demande l'annulation ; la tache s'arrete a la prochaine ligne."""
        self._token.cancel()

    def wait(self, timeout: Optional[float] = None) -> Optional[ResultCode]:
        """Attend la fin de la tache. Retourne None si le delai expire."""
        self._done.wait(timeout)
        return self._result

    def _dispatch(self, callback: Callable[..., Any], *args: Any) -> None:
        if self._dispatcher is None:
            callback(*args)
        else:
            self._dispatcher(callback, *args)

    def _progress(self, event: ProgressEvent) -> None:
        if self._on_progress is not None:
            self._dispatch(self._on_progress, event)

    def _run(self) -> None:
        try:
            result = self._coordinator.run(self._mode, self._plan, self._token, self._progress)
        except Exception as e:
            logger.exception(f"Tache d'export interrompue: {e}")
            result = ResultCode.GENERIC_ERROR
        self._result = result
        # wait() ne rend la main qu'apres la livraison du resultat
        try:
            if self._on_finished is not None:
                self._dispatch(self._on_finished, result)
        except Exception as e:
            logger.exception(f"Livraison du resultat d'export en echec: {e}")
        finally:
            self._done.set()


async def run_export_async(
    coordinator: ExportCoordinator,
    mode: ExportMode,
    plan: DestinationPlan,
    on_progress: Optional[Callable[[ProgressEvent], None]] = None,
) -> ResultCode:
    """
    Execute l'export hors de la boucle asyncio.

    La progression est rappelee dans la boucle. Si la coroutine est annulee,
    l'export est annule de facon cooperative et son resultat est attendu.
    """
    loop = asyncio.get_running_loop()
    finished: asyncio.Future[ResultCode] = loop.create_future()
    task = ExportTask(
        coordinator,
        mode,
        plan,
        on_progress=on_progress,
        on_finished=finished.set_result,
        dispatcher=loop.call_soon_threadsafe,
    )
    task.start()
    try:
        return await asyncio.shield(finished)
    except asyncio.CancelledError:
        task.cancel()
        return await finished
