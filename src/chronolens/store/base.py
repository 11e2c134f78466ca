"""
Event Store Interface.

The analytics and ingestion code never talks to a database directly; it
consumes this record-oriented protocol. Every method is a coroutine, so calls
into the store are the points where a running ingestion job yields to other
work on the event loop.

Contract
--------
- ``upsert_if_absent`` inserts unless an event with the same ``event_id``
  already exists and never updates. Returns True when a row was inserted.
  It must be atomic per key.
- ``get_children_of`` returns direct children in an unspecified but stable
  order; callers preserve whatever order they receive.
- ``get_in_range`` returns events with both span endpoints inside
  ``[start, end]``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from chronolens.core.contracts.event import Event


@runtime_checkable
class EventStore(Protocol):
    """Persistence surface consumed by the ingestion and analytics layers."""

    async def upsert_if_absent(self, event: Event) -> bool: ...

    async def get_by_id(self, event_id: str) -> Event | None: ...

    async def get_children_of(self, event_id: str) -> list[Event]: ...

    async def get_all(self) -> list[Event]: ...

    async def get_in_range(self, start: datetime, end: datetime) -> list[Event]: ...


__all__ = ["EventStore"]
