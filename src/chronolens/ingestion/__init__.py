"""Ingestion layer: line parser, job table and streaming runner."""

from __future__ import annotations

from chronolens.ingestion.jobs import JobStore, get_job_store
from chronolens.ingestion.parser import parse_line, try_parse_line
from chronolens.ingestion.runner import (
    iter_file_lines,
    iter_text_lines,
    run_ingestion,
    submit_ingestion,
)

__all__ = [
    "JobStore",
    "get_job_store",
    "iter_file_lines",
    "iter_text_lines",
    "parse_line",
    "run_ingestion",
    "submit_ingestion",
    "try_parse_line",
]
