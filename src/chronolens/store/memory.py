"""
In-memory EventStore backend.

A dictionary keyed by ``event_id`` with insertion order preserved. All work is
done between awaits on the single event-loop thread, so insert-if-absent is
atomic per key without a lock.

Note on Persistence
-------------------
Like the job table, this store is volatile: a restart loses every event. A
relational backend implementing :class:`~chronolens.store.base.EventStore`
can be swapped in without touching the ingestion or analytics code.
"""

from __future__ import annotations

from datetime import datetime

from chronolens.core.contracts.event import Event


class InMemoryEventStore:
    """Dictionary-backed implementation of the event store protocol."""

    __slots__ = ("_events",)

    def __init__(self, events: list[Event] | None = None) -> None:
        self._events: dict[str, Event] = {}
        for event in events or []:
            self._events.setdefault(event.event_id, event)

    async def upsert_if_absent(self, event: Event) -> bool:
        """Insert ``event`` unless its id is already stored."""
        if event.event_id in self._events:
            return False
        self._events[event.event_id] = event
        return True

    async def get_by_id(self, event_id: str) -> Event | None:
        return self._events.get(event_id)

    async def get_children_of(self, event_id: str) -> list[Event]:
        return [e for e in self._events.values() if e.parent_event_id == event_id]

    async def get_all(self) -> list[Event]:
        return list(self._events.values())

    async def get_in_range(self, start: datetime, end: datetime) -> list[Event]:
        return [e for e in self._events.values() if e.start_date >= start and e.end_date <= end]

    def __len__(self) -> int:
        return len(self._events)


__all__ = ["InMemoryEventStore"]
