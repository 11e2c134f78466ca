"""
API Routes for temporal insights.

Endpoints
---------
- `GET /api/insights/overlapping-events`: every overlapping pair.
- `GET /api/insights/temporal-gaps`: the largest gap in a date window.
- `GET /api/insights/event-influence`: the descendant path between two events.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from chronolens.analytics.gaps import find_largest_gap
from chronolens.analytics.influence import find_influence_path
from chronolens.analytics.overlaps import find_overlapping_events
from chronolens.api.dependencies import get_event_store
from chronolens.core.contracts.insights import GapReport, InfluencePath, OverlapPair
from chronolens.store.base import EventStore

router = APIRouter(prefix="/api/insights", tags=["Insights"])

StoreDep = Annotated[EventStore, Depends(get_event_store)]


@router.get("/overlapping-events", response_model=list[OverlapPair])
async def overlapping_events(store: StoreDep) -> list[OverlapPair]:
    return await find_overlapping_events(store)


@router.get("/temporal-gaps", response_model=GapReport)
async def temporal_gaps(
    store: StoreDep,
    start_date: Annotated[datetime, Query(alias="startDate")],
    end_date: Annotated[datetime, Query(alias="endDate")],
) -> GapReport:
    """A window holding fewer than two events reports ``largestGap: null``."""
    return await find_largest_gap(store, start_date, end_date)


@router.get("/event-influence", response_model=InfluencePath)
async def event_influence(
    store: StoreDep,
    from_id: Annotated[str, Query(alias="from")],
    to_id: Annotated[str, Query(alias="to")],
) -> InfluencePath:
    path = await find_influence_path(store, from_id, to_id)
    if path is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No influence path found."
        )
    return path


__all__ = ["router"]
