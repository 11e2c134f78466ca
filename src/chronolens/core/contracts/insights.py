"""Result contracts for the analytical queries.

Field names are snake_case in Python; the JSON keys (aliases) keep the shape
that API consumers already rely on, e.g. ``overlappingEventPairs`` and
``largestGap``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .event import Event


class OverlapPair(BaseModel):
    """Two events whose spans intersect, with the intersection length."""

    model_config = ConfigDict(populate_by_name=True)

    events: tuple[Event, Event] = Field(alias="overlappingEventPairs")
    overlap_duration_minutes: int


class GapInfo(BaseModel):
    """The idle interval between two consecutive events."""

    model_config = ConfigDict(populate_by_name=True)

    start_of_gap: datetime = Field(alias="startOfGap")
    end_of_gap: datetime = Field(alias="endOfGap")
    duration_minutes: int = Field(alias="durationMinutes")
    preceding_event: Event = Field(alias="precedingEvent")
    succeeding_event: Event = Field(alias="succeedingEvent")


class GapReport(BaseModel):
    """Outcome of a largest-gap search; ``largest_gap`` is None for "no gap"."""

    model_config = ConfigDict(populate_by_name=True)

    largest_gap: GapInfo | None = Field(default=None, alias="largestGap")
    message: str


class InfluencePath(BaseModel):
    """A descendant path between two events and its cumulative duration."""

    model_config = ConfigDict(populate_by_name=True)

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    total_duration: int
    path: list[Event]


class SearchPage(BaseModel):
    """One page of search results."""

    page: int
    limit: int
    events: list[Event]


__all__ = ["GapInfo", "GapReport", "InfluencePath", "OverlapPair", "SearchPage"]
