from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from threading import RLock
from typing import Dict, Iterable, List, Optional

from .models import TaskRecord
from .schemas import StoragePayload, TaskExport
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def encode_payload(records: Iterable[TaskRecord], now: Optional[datetime] = None) -> str:
    """Serialize records plus a last-updated timestamp for the storage slot."""
    payload = StoragePayload.model_validate(
        {
            "todos": [TaskExport.from_record(r) for r in records],
            "lastUpdated": now or datetime.now(),
        }
    )
    return payload.model_dump_json(by_alias=True)


def decode_payload(raw: Optional[str]) -> List[TaskRecord]:
    """Parse a storage slot value. An absent slot means no tasks yet."""
    if raw is None:
        return []
    payload = StoragePayload.model_validate(json.loads(raw))
    return [t.to_record() for t in payload.todos]


# PUBLIC_INTERFACE
class PersistenceAdapter(ABC):
    """
    Best-effort persistence of the whole task list under a single key.

    load() and save() never raise: failures are logged and the caller carries
    on with its in-memory state.
    """

    def __init__(self, key: str = "todoApp") -> None:
        self.key = key

    @abstractmethod
    def _read(self) -> Optional[str]:
        """Return the raw slot value, or None if nothing was stored yet."""

    @abstractmethod
    def _write(self, value: str) -> None:
        """Replace the raw slot value."""

    def load(self) -> List[TaskRecord]:
        try:
            records = decode_payload(self._read())
        except Exception:
            logger.exception("Error loading tasks from slot %r", self.key)
            return []
        logger.debug("Loaded %d tasks from slot %r", len(records), self.key)
        return records

    def save(self, records: Iterable[TaskRecord]) -> None:
        try:
            self._write(encode_payload(records))
        except Exception:
            logger.exception("Error saving tasks to slot %r", self.key)


class InMemoryStorage(PersistenceAdapter):
    """
    Process-local key-value slots, suitable for testing and default runtime.
    """

    def __init__(self, key: str = "todoApp", slots: Optional[Dict[str, str]] = None) -> None:
        super().__init__(key)
        self._lock = RLock()
        self.slots: Dict[str, str] = slots if slots is not None else {}

    def _read(self) -> Optional[str]:
        with self._lock:
            return self.slots.get(self.key)

    def _write(self, value: str) -> None:
        with self._lock:
            self.slots[self.key] = value


# PUBLIC_INTERFACE
def get_storage(settings: Optional[Settings] = None) -> PersistenceAdapter:
    """
    Factory to return the configured persistence adapter.
    - memory: InMemoryStorage
    - sqlite: SQLiteStorage, a key-value table in a local SQLite file
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteStorage

        return SQLiteStorage(settings.sqlite_db_path, key=settings.storage_key)
    return InMemoryStorage(key=settings.storage_key)
