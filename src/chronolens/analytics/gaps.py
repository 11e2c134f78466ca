"""
Gap Detector: the largest idle interval inside a date window.

Only events lying fully inside ``[start, end]`` take part. They are ordered by
start date and each adjacent pair is measured as
``next.start_date - current.end_date``. Overlapping neighbours give a negative
gap; such values are kept, not filtered. The first pair reaching the strictly
largest gap wins ties.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from chronolens.core.contracts.event import Event, as_utc, minutes_between
from chronolens.core.contracts.insights import GapInfo, GapReport
from chronolens.store.base import EventStore

GAP_FOUND = "Largest temporal gap identified."
NO_GAP = "No significant temporal gaps found."


def largest_gap(events: Sequence[Event]) -> GapInfo | None:
    """Return the largest gap between consecutive events, or None if fewer than two."""
    ordered = sorted(events, key=lambda e: e.start_date)
    if len(ordered) < 2:
        return None

    best: GapInfo | None = None
    best_delta = None
    for current, following in zip(ordered, ordered[1:], strict=False):
        delta = following.start_date - current.end_date
        if best_delta is None or delta > best_delta:
            best_delta = delta
            best = GapInfo(
                start_of_gap=current.end_date,
                end_of_gap=following.start_date,
                duration_minutes=minutes_between(current.end_date, following.start_date),
                preceding_event=current,
                succeeding_event=following,
            )
    return best


async def find_largest_gap(store: EventStore, start: datetime, end: datetime) -> GapReport:
    """Search the window ``[start, end]`` of ``store`` for its largest gap."""
    gap = largest_gap(await store.get_in_range(as_utc(start), as_utc(end)))
    return GapReport(largest_gap=gap, message=GAP_FOUND if gap is not None else NO_GAP)


__all__ = ["GAP_FOUND", "NO_GAP", "find_largest_gap", "largest_gap"]
