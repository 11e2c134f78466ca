"""Centralized configuration for Chronolens using Pydantic Settings (v2).

A single cached `settings` instance is built from:
- Real environment variables (highest precedence)
- `.env` files at the working directory: .env, .env.local, .env.dev/.env.test/.env.prod

Ingestion and traversal knobs (delimiter, NULL literal, strict id checks,
timeline depth bound, read chunk size) are all read from here so that tests
can override them through the environment.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `CHRONOLENS_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    delimiter : str
        Field separator for ingested lines; maps from `CHRONOLENS_DELIMITER`.
    null_literal : str
        Text in the parent column meaning "no parent"; maps from
        `CHRONOLENS_NULL_LITERAL`.
    strict_ids : bool
        Reject lines with a blank event id; maps from `CHRONOLENS_STRICT_IDS`.
        Off by default, which keeps ingestion permissive.
    max_timeline_depth : int
        Deepest timeline tree returned, counted in events from the root;
        maps from `CHRONOLENS_MAX_TIMELINE_DEPTH`. Capped below the nesting
        pydantic-core will serialize.
    read_chunk_bytes : int
        Size hint for each off-loop file read; maps from
        `CHRONOLENS_READ_CHUNK_BYTES`.
    """

    environment: EnvName = Field(default="dev", alias="CHRONOLENS_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")

    delimiter: str = Field(default="|", min_length=1, alias="CHRONOLENS_DELIMITER")
    null_literal: str = Field(default="NULL", alias="CHRONOLENS_NULL_LITERAL")
    strict_ids: bool = Field(default=False, alias="CHRONOLENS_STRICT_IDS")
    max_timeline_depth: int = Field(
        default=128, ge=1, le=200, alias="CHRONOLENS_MAX_TIMELINE_DEPTH"
    )
    read_chunk_bytes: int = Field(default=65536, ge=1, alias="CHRONOLENS_READ_CHUNK_BYTES")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`. Runtime code should call `load_settings()` rather than hold
    on to the module-level `settings` so that such overrides are honoured.
    """
    os.environ.setdefault("CHRONOLENS_ENV", "dev")
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "chronolens") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
