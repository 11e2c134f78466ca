"""Event listing and filtered, paginated search."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from chronolens.core.contracts.event import Event, as_utc
from chronolens.core.contracts.insights import SearchPage
from chronolens.store.base import EventStore

SortField = Literal["start_date", "end_date", "event_name", "duration_minutes", "event_id"]
SortOrder = Literal["asc", "desc"]


class SearchQuery(BaseModel):
    """Filters, ordering and paging for :func:`search_events`.

    ``start_date_after`` and ``end_date_before`` are strict bounds.
    """

    name: str | None = None
    start_date_after: datetime | None = None
    end_date_before: datetime | None = None
    sort_by: SortField = "start_date"
    sort_order: SortOrder = "asc"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @field_validator("start_date_after", "end_date_before")
    @classmethod
    def _aware(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None

    def matches(self, event: Event) -> bool:
        if self.name and self.name.lower() not in event.event_name.lower():
            return False
        if self.start_date_after is not None and not event.start_date > self.start_date_after:
            return False
        if self.end_date_before is not None and not event.end_date < self.end_date_before:
            return False
        return True


async def list_events(store: EventStore) -> list[Event]:
    """Return every stored event ordered by start date."""
    return sorted(await store.get_all(), key=lambda e: e.start_date)


async def search_events(store: EventStore, query: SearchQuery) -> SearchPage:
    """Filter, sort and page the events in ``store``."""
    hits = [e for e in await store.get_all() if query.matches(e)]
    hits.sort(key=lambda e: getattr(e, query.sort_by), reverse=query.sort_order == "desc")
    offset = (query.page - 1) * query.limit
    page = hits[offset : offset + query.limit]
    return SearchPage(page=query.page, limit=query.limit, events=page)


__all__ = ["SearchQuery", "list_events", "search_events"]
