"""Tests for the session-scoped pending resume storage."""

import json
import logging

import pytest

from app.errors import StorageQuotaExceededError, StorageWriteError
from app.services.resume_storage import (
    RESUME_READY_KEY,
    STORAGE_KEY,
    InMemoryKeyValueStore,
    ResumeStorage,
    SessionStoreRegistry,
)


class BrokenStore(InMemoryKeyValueStore):
    def set(self, key, value):
        raise OSError("disk full")

    def remove(self, key):
        raise OSError("locked")


def test_round_trip(storage, complete_resume):
    storage.save(complete_resume)

    assert storage.load().model_dump() == complete_resume.model_dump()


def test_save_writes_json_and_ready_marker(storage, store, complete_resume):
    storage.save(complete_resume)

    stored = json.loads(store.get(STORAGE_KEY))
    assert stored["personalInfo"]["name"] == "Jane Smith"
    assert stored["certifications"] == ["OSHA 30"]
    assert store.get(RESUME_READY_KEY) == "true"


def test_save_replaces_previous_record(storage, complete_resume):
    storage.save(complete_resume)
    updated = complete_resume.model_copy(update={"skills": ["Soldering"]})

    storage.save(updated)

    assert storage.load().skills == ["Soldering"]


def test_readiness_lifecycle(storage, complete_resume):
    assert storage.is_ready() is False

    storage.save(complete_resume)
    assert storage.is_ready() is True

    storage.clear()
    assert storage.is_ready() is False
    assert storage.load() is None


@pytest.mark.parametrize("marker", ["TRUE", "1", "yes", ""])
def test_ready_only_for_exact_marker(store, storage, marker):
    store.set(RESUME_READY_KEY, marker)

    assert storage.is_ready() is False


def test_load_without_data_returns_none(storage):
    assert storage.load() is None


def test_load_malformed_data_returns_none_and_logs(store, storage, caplog):
    store.set(STORAGE_KEY, "{not json")

    with caplog.at_level(logging.ERROR):
        assert storage.load() is None

    assert "Error reading resume data" in caplog.text


def test_load_wrong_shape_returns_none(store, storage):
    store.set(STORAGE_KEY, json.dumps({"skills": "not a list"}))

    assert storage.load() is None


def test_save_failure_raises_storage_write_error(complete_resume):
    storage = ResumeStorage(BrokenStore())

    with pytest.raises(StorageWriteError, match="Failed to save resume data"):
        storage.save(complete_resume)


def test_save_over_quota_raises_storage_write_error(complete_resume):
    storage = ResumeStorage(InMemoryKeyValueStore(quota_bytes=32))

    with pytest.raises(StorageWriteError) as exc_info:
        storage.save(complete_resume)

    assert isinstance(exc_info.value.__cause__, StorageQuotaExceededError)


def test_clear_failure_is_logged_not_raised(caplog):
    storage = ResumeStorage(BrokenStore())

    with caplog.at_level(logging.ERROR):
        storage.clear()

    assert "Error clearing resume data" in caplog.text


def test_quota_counts_replaced_value_once():
    store = InMemoryKeyValueStore(quota_bytes=10)
    store.set("k", "123456789")

    store.set("k", "987654321")

    assert store.get("k") == "987654321"
    with pytest.raises(StorageQuotaExceededError):
        store.set("other", "x")


def test_registry_scopes_stores_per_session(complete_resume):
    registry = SessionStoreRegistry()
    ResumeStorage(registry.get_store("a")).save(complete_resume)

    assert ResumeStorage(registry.get_store("a")).is_ready() is True
    assert ResumeStorage(registry.get_store("b")).is_ready() is False

    registry.drop("a")
    assert ResumeStorage(registry.get_store("a")).load() is None


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestSessionStoreRegistry:
    def test_idle_sessions_expire(self, complete_resume):
        clock = FakeClock()
        registry = SessionStoreRegistry(ttl_seconds=60, timer=clock)
        ResumeStorage(registry.get_store("a")).save(complete_resume)

        clock.now = 61

        assert len(registry) == 0
        assert ResumeStorage(registry.get_store("a")).load() is None

    def test_access_restarts_expiry(self, complete_resume):
        clock = FakeClock()
        registry = SessionStoreRegistry(ttl_seconds=60, timer=clock)
        ResumeStorage(registry.get_store("a")).save(complete_resume)

        clock.now = 50
        registry.get_store("a")
        clock.now = 100

        assert ResumeStorage(registry.get_store("a")).is_ready() is True

    def test_session_count_is_bounded(self, complete_resume):
        registry = SessionStoreRegistry(max_sessions=3)
        for i in range(10):
            ResumeStorage(registry.get_store(f"session-{i}")).save(complete_resume)

        assert len(registry) == 3

    def test_release_drops_empty_store(self):
        registry = SessionStoreRegistry()
        registry.acquire("a")

        registry.release("a")

        assert len(registry) == 0

    def test_release_keeps_store_with_pending_data(self, complete_resume):
        registry = SessionStoreRegistry()
        ResumeStorage(registry.acquire("a")).save(complete_resume)

        registry.release("a")

        assert ResumeStorage(registry.get_store("a")).is_ready() is True

    def test_cleared_store_is_dropped_on_release(self, complete_resume):
        registry = SessionStoreRegistry()
        storage = ResumeStorage(registry.acquire("a"))
        storage.save(complete_resume)
        storage.clear()

        registry.release("a")

        assert len(registry) == 0

    def test_store_in_use_is_not_dropped(self, complete_resume):
        registry = SessionStoreRegistry()
        first = registry.acquire("a")
        second = registry.acquire("a")
        assert first is second

        registry.release("a")
        ResumeStorage(second).save(complete_resume)
        registry.release("a")

        assert ResumeStorage(registry.get_store("a")).is_ready() is True
