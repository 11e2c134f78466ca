"""Ingestion job status contract.

One :class:`IngestionJob` exists per ingestion request. It is created in the
``PROCESSING`` state, its counters only ever grow while lines are consumed,
and it ends ``COMPLETED`` (input exhausted, whatever the per-line outcome) or
``FAILED`` (the source itself could not be read).

The record is exposed to status pollers with camelCase keys::

    {jobId, status, totalLines, processedLines, errorLines, errors, startTime, endTime}
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class JobStatus(str, Enum):
    """Lifecycle states of an ingestion job."""

    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class IngestionJob(BaseModel):
    """Live progress record for one ingestion run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job_id: str
    status: JobStatus = JobStatus.PROCESSING
    total_lines: int = Field(default=0, ge=0)
    processed_lines: int = Field(default=0, ge=0)
    error_lines: int = Field(default=0, ge=0)
    errors: list[str] = Field(default_factory=list)
    start_time: datetime
    end_time: datetime | None = None

    @property
    def is_finished(self) -> bool:
        """Return True once the job has left the PROCESSING state."""
        return self.status is not JobStatus.PROCESSING


__all__ = ["IngestionJob", "JobStatus"]
