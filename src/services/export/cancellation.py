"""
Jeton d'annulation cooperative de l'export.

Positionnable a tout moment depuis l'exterieur ; le pipeline ne fait que
l'observer entre deux familles et entre deux lignes.
"""

import threading


class CancellationToken:
    """Drapeau d'annulation partage entre l'appelant et le thread d'export."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()
