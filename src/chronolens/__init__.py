"""Chronolens: ingestion and temporal analytics over historical event records.

The package is organised in layers:

- ``chronolens.core``      : settings, logging, errors, Result, data contracts.
- ``chronolens.store``     : the event store interface and an in-memory backend.
- ``chronolens.ingestion`` : line parser, job tracker and streaming runner.
- ``chronolens.analytics`` : timeline, overlap, gap, influence and search queries.
- ``chronolens.api``       : FastAPI application.
- ``chronolens.cli``       : Typer command line.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"
