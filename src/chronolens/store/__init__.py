"""Event storage: the collaborator interface and the in-memory backend."""

from __future__ import annotations

from chronolens.store.base import EventStore
from chronolens.store.memory import InMemoryEventStore

__all__ = ["EventStore", "InMemoryEventStore"]
