"""Core package initializer for Chronolens.

Settings, errors, the Result container and the Pydantic contracts live here:
    from chronolens.core.settings import settings, load_settings, Settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
