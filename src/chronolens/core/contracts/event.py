"""Event contracts: the stored record and its timeline tree view.

An :class:`Event` is one parsed input line. Its ``duration_minutes`` is always
derived from the two dates at construction time (floor of whole minutes, may
be negative) so that the value cannot drift from its inputs.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, Field, field_validator, model_validator

ONE_MINUTE = timedelta(minutes=1)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values are returned unchanged."""
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def minutes_between(start: datetime, end: datetime) -> int:
    """Return floor((end - start) / 1 minute)."""
    return (end - start) // ONE_MINUTE


class EventMetadata(BaseModel):
    """Ingestion provenance attached to every event."""

    line: int = Field(..., description="Line number in the source file (header is line 1).")


class Event(BaseModel):
    """A historical event with a time span and an optional parent."""

    event_id: str = Field(..., description="Identifier; not validated, may be empty.")
    event_name: str = Field(default="")
    description: str = Field(default="")
    start_date: datetime
    end_date: datetime
    duration_minutes: int = Field(default=0, description="Derived from start/end dates.")
    parent_event_id: str | None = Field(default=None, description="Unvalidated parent id.")
    research_value: str = Field(default="")
    metadata: EventMetadata | None = Field(default=None)

    @field_validator("start_date", "end_date")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @model_validator(mode="after")
    def _derive_duration(self) -> Event:
        """Recompute ``duration_minutes`` from the span on every construction."""
        self.duration_minutes = minutes_between(self.start_date, self.end_date)
        return self


class TimelineNode(Event):
    """An event together with its full descendant tree."""

    children: list[TimelineNode] = Field(default_factory=list)


__all__ = ["Event", "EventMetadata", "TimelineNode", "as_utc", "minutes_between"]
