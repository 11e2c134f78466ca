"""Read-only analytical queries over stored events."""

from __future__ import annotations

from chronolens.analytics.gaps import find_largest_gap, largest_gap
from chronolens.analytics.influence import find_influence_path
from chronolens.analytics.overlaps import find_overlapping_events, find_overlaps
from chronolens.analytics.search import SearchQuery, list_events, search_events
from chronolens.analytics.timeline import build_timeline

__all__ = [
    "SearchQuery",
    "build_timeline",
    "find_influence_path",
    "find_largest_gap",
    "find_overlapping_events",
    "find_overlaps",
    "largest_gap",
    "list_events",
    "search_events",
]
