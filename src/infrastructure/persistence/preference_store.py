"""
Implementation SQLModel du stockage des preferences.

Les preferences sont stockees en cle/valeur texte dans la table preferences.
"""

from typing import Optional

from sqlmodel import Session

from src.core.ports.preferences import IPreferenceStore
from src.core.value_objects import ExportFamily
from src.infrastructure.persistence.models import PreferenceModel

KEY_LAST_BACKUP = "last_backup"


class SQLModelPreferenceStore(IPreferenceStore):
    """
    Stockage des preferences de sauvegarde dans la base SQLite.

    Chaque ecriture est validee immediatement (commit).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _get(self, key: str) -> Optional[str]:
        model = self._session.get(PreferenceModel, key)
        return model.value if model else None

    def _set(self, key: str, value: Optional[str]) -> None:
        model = self._session.get(PreferenceModel, key)
        if value is None:
            if model is not None:
                self._session.delete(model)
                self._session.commit()
            return
        if model is None:
            model = PreferenceModel(key=key, value=value)
        else:
            model.value = value
        self._session.add(model)
        self._session.commit()

    def get_last_backup(self) -> Optional[int]:
        value = self._get(KEY_LAST_BACKUP)
        return int(value) if value else None

    def set_last_backup(self, timestamp_ms: int) -> None:
        self._set(KEY_LAST_BACKUP, str(timestamp_ms))

    def get_destination_handle(self, family: ExportFamily) -> Optional[str]:
        return self._get(family.handle_key)

    def store_destination_handle(self, family: ExportFamily, handle: Optional[str]) -> None:
        self._set(family.handle_key, handle)
