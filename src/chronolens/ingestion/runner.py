"""
Streaming ingestion runner.

This module turns a source of text lines into stored events while keeping the
owning job's record current. It is split into two stages:

1. :func:`iter_parsed_lines` - an async generator that skips blank lines,
   takes the first non-blank line as the header and yields
   ``(line_number, Result[Event, IngestionError])`` for every data line.
2. :func:`run_ingestion` - a fold over that stream that persists each
   ``Ok`` event through the store and records each outcome on the job.

Line numbers count non-blank lines, header included, so the first data line
is line 2. A failing line (parse or persistence) is recorded and skipped; the
job always reaches COMPLETED once the source is exhausted. If the source
itself cannot be read the job becomes FAILED instead.

Sources
-------
- :func:`iter_file_lines` reads a file in chunks off the event loop.
- :func:`iter_text_lines` serves an in-memory string.
"""

from __future__ import annotations

import asyncio
import io
from collections.abc import AsyncIterator, Iterable
from pathlib import Path

from chronolens.core.contracts.event import Event
from chronolens.core.errors import IngestionError, PersistenceError
from chronolens.core.result import Result
from chronolens.core.settings import get_logger, load_settings
from chronolens.ingestion.jobs import JobStore, get_job_store
from chronolens.ingestion.parser import split_header, try_parse_line
from chronolens.store.base import EventStore

logger = get_logger("chronolens.ingestion")

ParsedLine = tuple[int, Result[Event, IngestionError]]

# Strong references to tasks started by `submit_ingestion`; the loop only
# keeps weak ones.
_background_tasks: set[asyncio.Task[None]] = set()


# --------------------------------------------------------------------------- #
# Line sources
# --------------------------------------------------------------------------- #


async def iter_file_lines(
    path: str | Path, chunk_bytes: int | None = None
) -> AsyncIterator[str]:
    """Yield the lines of a UTF-8 file, reading each chunk in a worker thread."""
    hint = chunk_bytes or load_settings().read_chunk_bytes
    fh = await asyncio.to_thread(open, Path(path), "r", encoding="utf-8")
    try:
        while True:
            chunk: list[str] = await asyncio.to_thread(fh.readlines, hint)
            if not chunk:
                break
            for line in chunk:
                yield line.rstrip("\r\n")
    finally:
        await asyncio.to_thread(fh.close)


async def iter_text_lines(text: str | Iterable[str]) -> AsyncIterator[str]:
    """Yield lines from a string or an iterable of lines.

    Strings are split only where a file opened in text mode would split them,
    so Unicode line separators inside a field stay part of the record.
    """
    lines = io.StringIO(text, newline=None) if isinstance(text, str) else text
    for line in lines:
        yield line.rstrip("\r\n")
        await asyncio.sleep(0)


# --------------------------------------------------------------------------- #
# Stage 1: parse
# --------------------------------------------------------------------------- #


async def iter_parsed_lines(lines: AsyncIterator[str]) -> AsyncIterator[ParsedLine]:
    """Yield one parse outcome per data line of ``lines``."""
    cfg = load_settings()
    headers: list[str] | None = None
    line_number = 0

    async for line in lines:
        if not line.strip():
            continue
        line_number += 1

        if headers is None:
            headers = split_header(line, cfg.delimiter)
            continue

        yield line_number, try_parse_line(
            headers,
            line,
            line_number,
            delimiter=cfg.delimiter,
            null_literal=cfg.null_literal,
            strict_ids=cfg.strict_ids,
        )


# --------------------------------------------------------------------------- #
# Stage 2: persist and fold into the job record
# --------------------------------------------------------------------------- #


async def _persist(store: EventStore, event: Event, line_number: int) -> None:
    try:
        await store.upsert_if_absent(event)
    except Exception as exc:
        raise PersistenceError(
            f"Failed to store event {event.event_id!r}: {exc}", line_number
        ) from exc


async def run_ingestion(
    job_id: str,
    lines: AsyncIterator[str],
    store: EventStore,
    jobs: JobStore | None = None,
) -> None:
    """
    Consume ``lines`` to completion, updating the job ``job_id`` as it goes.

    The job must already exist in ``jobs`` (see :meth:`JobStore.create_job`).
    This coroutine never raises for per-line problems; a source that cannot
    be read marks the job FAILED.
    """
    jobs = jobs or get_job_store()
    logger.info("Ingestion %s started", job_id)

    try:
        async for line_number, outcome in iter_parsed_lines(lines):
            if outcome.is_ok():
                try:
                    await _persist(store, outcome.unwrap(), line_number)
                except PersistenceError as exc:
                    failure: IngestionError = exc
                else:
                    jobs.record_success(job_id)
                    continue
            else:
                failure = outcome.unwrap_err()

            logger.debug("Ingestion %s rejected line %d: %s", job_id, line_number, failure)
            jobs.record_failure(job_id, line_number, str(failure))
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Ingestion %s could not read its source: %s", job_id, exc)
        jobs.mark_failed(job_id, f"Source: {exc}")
        return

    jobs.mark_completed(job_id)
    job = jobs.get_job(job_id)
    if job is not None:
        logger.info(
            "Ingestion %s completed: %d lines, %d processed, %d errors",
            job_id,
            job.total_lines,
            job.processed_lines,
            job.error_lines,
        )


def submit_ingestion(
    lines: AsyncIterator[str],
    store: EventStore,
    jobs: JobStore | None = None,
) -> str:
    """
    Create a job, start ingesting in the background and return its id at once.

    Must be called from inside a running event loop. Callers poll the job
    record by id to follow progress.
    """
    jobs = jobs or get_job_store()
    job_id = jobs.create_job()
    task = asyncio.get_running_loop().create_task(run_ingestion(job_id, lines, store, jobs))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return job_id


__all__ = [
    "iter_file_lines",
    "iter_parsed_lines",
    "iter_text_lines",
    "run_ingestion",
    "submit_ingestion",
]
