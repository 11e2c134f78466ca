"""
Background task runner for ingestion jobs.

This module provides the coroutine scheduled through FastAPI's
`BackgroundTasks` once the 202 response has been sent. The job record already
exists (created by the route), so pollers see it as PROCESSING straight away.

Errors never escape to the server: per-line failures are folded into the job
by the runner, unreadable sources end as FAILED, and anything unexpected is
logged and also recorded as FAILED so the job cannot stay PROCESSING forever.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

from chronolens.core.settings import get_logger
from chronolens.ingestion.jobs import JobStore
from chronolens.ingestion.runner import iter_file_lines, iter_text_lines, run_ingestion
from chronolens.store.base import EventStore

logger = get_logger("chronolens.api.background")


async def _run_guarded(
    job_id: str, lines: AsyncIterator[str], store: EventStore, jobs: JobStore
) -> None:
    try:
        await run_ingestion(job_id, lines, store, jobs)
    except Exception as exc:
        logger.exception("Ingestion %s crashed", job_id)
        jobs.mark_failed(job_id, f"Ingestion Error: {exc}")


async def ingest_path_task(job_id: str, file_path: str, store: EventStore, jobs: JobStore) -> None:
    """Ingest the server-side file at ``file_path`` into ``store``."""
    await _run_guarded(job_id, iter_file_lines(Path(file_path)), store, jobs)


async def ingest_text_task(job_id: str, text: str, store: EventStore, jobs: JobStore) -> None:
    """Ingest an already-received request body into ``store``."""
    await _run_guarded(job_id, iter_text_lines(text), store, jobs)


__all__ = ["ingest_path_task", "ingest_text_task"]
