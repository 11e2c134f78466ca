"""Request/response bodies specific to the HTTP layer.

Domain results (events, jobs, insights) are returned as the core contracts
directly; only the ingestion hand-off needs its own shapes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IngestPathRequest(BaseModel):
    """Body of ``POST /api/events/ingest_path``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_path: str = Field(..., min_length=1, description="Path readable by the server.")


class IngestAccepted(BaseModel):
    """202 payload returned when an ingestion job has been started."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str = "Ingestion initiated"
    job_id: str
    message: str

    @classmethod
    def for_job(cls, job_id: str) -> IngestAccepted:
        return cls(
            job_id=job_id,
            message=f"Check /api/events/ingestion-status/{job_id} for updates.",
        )


__all__ = ["IngestAccepted", "IngestPathRequest"]
