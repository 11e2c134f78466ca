"""
In-Memory Job Store for ingestion progress tracking.

This module owns the process-wide table of :class:`IngestionJob` records,
keyed by job id.

Responsibilities
----------------
- **Create**: Allocate an ``ingest-job-<uuid4>`` id and a PROCESSING record.
- **Read**: Return the live record for status polling.
- **Update**: Counter bumps and the terminal COMPLETED/FAILED transitions.
- **Reap**: Drop finished jobs on request; nothing is removed implicitly.

Concurrency
-----------
Each record is written only by the ingestion task that owns its id, and all
tasks run on one event loop, so no locking is done. Driving ingestion from OS
threads would need a lock per entry.

Note on Persistence
-------------------
This is a volatile memory store. If the process restarts, all job history is
lost. Durable tracking would put these records behind the same kind of store
interface used for events.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import ClassVar

from chronolens.core.contracts.job import IngestionJob, JobStatus

JOB_ID_PREFIX = "ingest-job-"


class JobStore:
    """
    A simple dictionary-backed store for IngestionJob objects.
    """

    _instance: ClassVar[JobStore | None] = None

    def __init__(self) -> None:
        self._jobs: dict[str, IngestionJob] = {}

    @classmethod
    def get_instance(cls) -> JobStore:
        """Accessor for the global singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def create_job(self) -> str:
        """
        Register a new job and initialise its record to PROCESSING.

        Returns
        -------
        str
            The generated job id.
        """
        job_id = f"{JOB_ID_PREFIX}{uuid.uuid4()}"
        self._jobs[job_id] = IngestionJob(job_id=job_id, start_time=datetime.now(UTC))
        return job_id

    def get_job(self, job_id: str) -> IngestionJob | None:
        """Retrieve the job record, or None if not found."""
        return self._jobs.get(job_id)

    def _require(self, job_id: str) -> IngestionJob:
        job = self._jobs.get(job_id)
        if job is None:
            raise KeyError(f"Unknown ingestion job {job_id!r}")
        return job

    def record_success(self, job_id: str) -> None:
        """Count one data line that was parsed and persisted."""
        job = self._require(job_id)
        job.total_lines += 1
        job.processed_lines += 1

    def record_failure(self, job_id: str, line_number: int, reason: str) -> None:
        """Count one data line that failed and keep its message."""
        job = self._require(job_id)
        job.total_lines += 1
        job.error_lines += 1
        job.errors.append(f"Line {line_number}: {reason}")

    def mark_completed(self, job_id: str) -> None:
        """Transition a job to COMPLETED, whatever its per-line outcome."""
        job = self._require(job_id)
        job.status = JobStatus.COMPLETED
        job.end_time = datetime.now(UTC)

    def mark_failed(self, job_id: str, error: str) -> None:
        """Transition a job to FAILED and keep the source-level error."""
        job = self._require(job_id)
        job.status = JobStatus.FAILED
        job.errors.append(error)
        job.end_time = datetime.now(UTC)

    def reap(self, older_than: timedelta | None = None) -> int:
        """
        Drop finished jobs and return how many were removed.

        When ``older_than`` is given, only jobs that ended at least that long
        ago are dropped. Jobs still PROCESSING are always kept.
        """
        now = datetime.now(UTC)
        doomed = [
            job_id
            for job_id, job in self._jobs.items()
            if job.is_finished
            and job.end_time is not None
            and (older_than is None or now - job.end_time >= older_than)
        ]
        for job_id in doomed:
            del self._jobs[job_id]
        return len(doomed)

    def clear(self) -> None:
        """Forget every job (tests only)."""
        self._jobs.clear()


def get_job_store() -> JobStore:
    return JobStore.get_instance()


__all__ = ["JOB_ID_PREFIX", "JobStore", "get_job_store"]
