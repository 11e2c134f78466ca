"""
API Routes for event ingestion, lookup, search and timelines.

Endpoints
---------
- `POST /api/events/ingest`: Ingest a pipe-delimited body (Async, 202).
- `POST /api/events/ingest_path`: Ingest a server-side file (Async, 202).
- `GET /api/events/ingestion-status/{job_id}`: Poll a job's progress.
- `GET /api/events`: All events ordered by start date.
- `GET /api/events/search`: Filtered, sorted, paginated search.
- `GET /api/events/{event_id}`: One event.
- `GET /api/timeline/{event_id}`: An event with its descendant tree.

Design Decisions
----------------
- **Asynchronous Handoff**: ingestion routes create the job, schedule the
  work and return 202 immediately; clients poll the status route.
- `/events/search` is registered before `/events/{event_id}` so that the
  literal path is not captured as an id.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, status

from chronolens.analytics.search import (
    SearchQuery,
    SortField,
    SortOrder,
    list_events,
    search_events,
)
from chronolens.analytics.timeline import build_timeline
from chronolens.api.background import ingest_path_task, ingest_text_task
from chronolens.api.dependencies import get_event_store, get_jobs
from chronolens.api.schemas import IngestAccepted, IngestPathRequest
from chronolens.core.contracts.event import Event, TimelineNode
from chronolens.core.contracts.insights import SearchPage
from chronolens.core.contracts.job import IngestionJob
from chronolens.core.errors import CycleDetectedError
from chronolens.ingestion.jobs import JobStore
from chronolens.store.base import EventStore

router = APIRouter(prefix="/api", tags=["Events"])

StoreDep = Annotated[EventStore, Depends(get_event_store)]
JobsDep = Annotated[JobStore, Depends(get_jobs)]


@router.post(
    "/events/ingest",
    response_model=IngestAccepted,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Ingest events from a pipe-delimited request body",
)
async def ingest_from_body(
    request: Request, background_tasks: BackgroundTasks, store: StoreDep, jobs: JobsDep
) -> IngestAccepted:
    """
    Start ingesting the raw ``text/plain`` body.

    The first non-blank line must be the header row.
    """
    text = (await request.body()).decode("utf-8")
    job_id = jobs.create_job()
    background_tasks.add_task(ingest_text_task, job_id, text, store, jobs)
    return IngestAccepted.for_job(job_id)


@router.post(
    "/events/ingest_path",
    response_model=IngestAccepted,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Ingest events from a file path on the server",
)
async def ingest_from_path(
    body: IngestPathRequest, background_tasks: BackgroundTasks, store: StoreDep, jobs: JobsDep
) -> IngestAccepted:
    """Start ingesting ``filePath``; an unreadable file ends the job as FAILED."""
    job_id = jobs.create_job()
    background_tasks.add_task(ingest_path_task, job_id, body.file_path, store, jobs)
    return IngestAccepted.for_job(job_id)


@router.get(
    "/events/ingestion-status/{job_id}",
    response_model=IngestionJob,
    summary="Get ingestion job status",
)
async def get_ingestion_status(job_id: str, jobs: JobsDep) -> IngestionJob:
    """Return the live job record."""
    job = jobs.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


@router.get("/events", response_model=list[Event], summary="Get all events")
async def get_all_events(store: StoreDep) -> list[Event]:
    return await list_events(store)


@router.get("/events/search", response_model=SearchPage, summary="Search events")
async def search(
    store: StoreDep,
    name: str | None = None,
    start_date_after: datetime | None = None,
    end_date_before: datetime | None = None,
    sort_by: Annotated[SortField, Query(alias="sortBy")] = "start_date",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "asc",
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1)] = 10,
) -> SearchPage:
    """Filter by name substring and strict date bounds, then sort and page."""
    query = SearchQuery(
        name=name,
        start_date_after=start_date_after,
        end_date_before=end_date_before,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return await search_events(store, query)


@router.get("/events/{event_id}", response_model=Event, summary="Get an event by id")
async def get_event(event_id: str, store: StoreDep) -> Event:
    event = await store.get_by_id(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return event


@router.get(
    "/timeline/{event_id}",
    response_model=TimelineNode,
    summary="Get a timeline for an event and its descendants",
)
async def get_timeline(event_id: str, store: StoreDep) -> TimelineNode:
    """
    Return the event with nested ``children``.

    404 when the root is unknown; 409 when the parent relation loops or the
    tree is deeper than the configured bound.
    """
    try:
        timeline = await build_timeline(store, event_id)
    except CycleDetectedError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if timeline is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timeline not found")
    return timeline


__all__ = ["router"]
