"""
Overlap Detector.

Two events overlap when ``a.start < b.end and b.start < a.end`` (half-open
spans, so touching endpoints do not count). Every pair is compared once, in
traversal order, which is quadratic in the number of events; the catalogue
sizes this serves are small enough for that.
"""

from __future__ import annotations

from collections.abc import Sequence

from chronolens.core.contracts.event import Event, minutes_between
from chronolens.core.contracts.insights import OverlapPair
from chronolens.store.base import EventStore


def overlap_minutes(a: Event, b: Event) -> int | None:
    """Return the whole minutes shared by ``a`` and ``b``, or None if disjoint."""
    if not (a.start_date < b.end_date and b.start_date < a.end_date):
        return None
    return minutes_between(max(a.start_date, b.start_date), min(a.end_date, b.end_date))


def find_overlaps(events: Sequence[Event]) -> list[OverlapPair]:
    """Return every unordered pair of overlapping events with its duration."""
    pairs: list[OverlapPair] = []
    for i, a in enumerate(events):
        for b in events[i + 1 :]:
            minutes = overlap_minutes(a, b)
            if minutes is not None:
                pairs.append(OverlapPair(events=(a, b), overlap_duration_minutes=minutes))
    return pairs


async def find_overlapping_events(store: EventStore) -> list[OverlapPair]:
    """Run :func:`find_overlaps` over everything in ``store``."""
    return find_overlaps(await store.get_all())


__all__ = ["find_overlapping_events", "find_overlaps", "overlap_minutes"]
