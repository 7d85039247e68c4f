import logging
import threading
import time
from typing import Dict, Optional, Protocol

from cachetools import TTLCache
from pydantic import ValidationError as PydanticValidationError

from app.errors import StorageQuotaExceededError, StorageReadError, StorageWriteError
from app.models import ResumeData

logger = logging.getLogger(__name__)

STORAGE_KEY = "resumeData"
RESUME_READY_KEY = "resumeReady"
READY_MARKER = "true"


class KeyValueStore(Protocol):
    """String key-value area scoped to a single client session."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """
    Dict-backed ``KeyValueStore``.

    ``quota_bytes`` caps the total UTF-8 size of keys and values, the way a
    browser caps localStorage. Writes past the cap raise
    ``StorageQuotaExceededError`` and leave the store unchanged.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._items: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = self._size(exclude=key)
            needed = len(key.encode("utf-8")) + len(value.encode("utf-8"))
            if used + needed > self.quota_bytes:
                raise StorageQuotaExceededError(
                    f"Storage quota of {self.quota_bytes} bytes exceeded"
                )
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def is_empty(self) -> bool:
        return not self._items

    def _size(self, exclude: str = None) -> int:
        return sum(
            len(k.encode("utf-8")) + len(v.encode("utf-8"))
            for k, v in self._items.items()
            if k != exclude
        )


class SessionStoreRegistry:
    """
    Hands out one ``InMemoryKeyValueStore`` per session id.

    Stores live in a ``TTLCache``: at most ``max_sessions`` of them, each
    forgotten ``ttl_seconds`` after it was last handed out. Requests lease a
    store with ``acquire`` and give it back with ``release``; a store that is
    empty once no request holds it is dropped right away.
    """

    def __init__(
        self,
        quota_bytes: Optional[int] = None,
        max_sessions: int = 10000,
        ttl_seconds: float = 24 * 60 * 60,
        timer=time.monotonic,
    ):
        self.quota_bytes = quota_bytes
        self._stores = TTLCache(maxsize=max_sessions, ttl=ttl_seconds, timer=timer)
        self._leases: Dict[str, int] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            self._stores.expire()
            return len(self._stores)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._stores

    def get_store(self, session_id: str) -> InMemoryKeyValueStore:
        with self._lock:
            return self._get_or_create(session_id)

    def acquire(self, session_id: str) -> InMemoryKeyValueStore:
        with self._lock:
            self._leases[session_id] = self._leases.get(session_id, 0) + 1
            return self._get_or_create(session_id)

    def release(self, session_id: str) -> None:
        with self._lock:
            remaining = self._leases.get(session_id, 0) - 1
            if remaining > 0:
                self._leases[session_id] = remaining
                return
            self._leases.pop(session_id, None)
            store = self._stores.get(session_id)
            if store is not None and store.is_empty():
                del self._stores[session_id]

    def drop(self, session_id: str) -> None:
        with self._lock:
            self._stores.pop(session_id, None)

    def _get_or_create(self, session_id: str) -> InMemoryKeyValueStore:
        store = self._stores.get(session_id)
        if store is None:
            store = InMemoryKeyValueStore(quota_bytes=self.quota_bytes)
        # Re-inserting restarts the session's expiry
        self._stores[session_id] = store
        return store


class ResumeStorage:
    """Pending resume record and readiness flag inside a session's store."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def save(self, data: ResumeData) -> None:
        try:
            self.store.set(STORAGE_KEY, data.model_dump_json(by_alias=True))
            self.store.set(RESUME_READY_KEY, READY_MARKER)
        except Exception as e:
            logger.error(f"Error saving resume data: {e}")
            raise StorageWriteError() from e

    def load(self) -> Optional[ResumeData]:
        try:
            raw = self.store.get(STORAGE_KEY)
            if not raw:
                return None
            try:
                return ResumeData.model_validate_json(raw)
            except PydanticValidationError as e:
                raise StorageReadError(f"Stored resume data is malformed: {e}") from e
        except Exception:
            logger.exception("Error reading resume data")
            return None

    def is_ready(self) -> bool:
        return self.store.get(RESUME_READY_KEY) == READY_MARKER

    def clear(self) -> None:
        try:
            self.store.remove(STORAGE_KEY)
            self.store.remove(RESUME_READY_KEY)
        except Exception:
            logger.exception("Error clearing resume data")
