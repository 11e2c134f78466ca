"""FastAPI dependency providers.

The event store is a process-wide singleton by default. Tests (or a
deployment backed by a real database) swap it through
``app.dependency_overrides[get_event_store]``.
"""

from __future__ import annotations

from chronolens.ingestion.jobs import JobStore, get_job_store
from chronolens.store.base import EventStore
from chronolens.store.memory import InMemoryEventStore

_event_store: InMemoryEventStore | None = None


def get_event_store() -> EventStore:
    """Return the shared event store, creating it on first use."""
    global _event_store
    if _event_store is None:
        _event_store = InMemoryEventStore()
    return _event_store


def get_jobs() -> JobStore:
    return get_job_store()


__all__ = ["get_event_store", "get_jobs"]
