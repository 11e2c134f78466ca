"""Exception taxonomy for Chronolens.

Per-line ingestion failures derive from :class:`IngestionError`; their
``str()`` is the reason recorded in a job's error list, so messages are kept
short and always name the offending line where one exists.

Negative query outcomes (unknown event, no path, no gap) are *results*, not
exceptions, and have no class here.
"""

from __future__ import annotations


class ChronolensError(Exception):
    """Root of every error raised by this package."""


class IngestionError(ChronolensError):
    """A single input line could not be turned into a stored event."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class MalformedLineError(IngestionError):
    """Field count does not match the header (or strict id check failed)."""


class InvalidDateError(IngestionError):
    """A start or end date could not be parsed."""


class PersistenceError(IngestionError):
    """The event store rejected a write."""


class CycleDetectedError(ChronolensError):
    """A parent/child traversal revisited an event already on its path."""

    def __init__(self, event_id: str, path: list[str] | None = None) -> None:
        self.event_id = event_id
        self.path = list(path or [])
        super().__init__(self._describe())

    def _describe(self) -> str:
        trail = " -> ".join([*self.path, self.event_id])
        return f"Cycle detected in parent relation at {self.event_id!r}: {trail}"


class TraversalDepthError(CycleDetectedError):
    """A traversal went deeper than the configured bound."""

    def __init__(self, event_id: str, limit: int) -> None:
        self.limit = limit
        super().__init__(event_id)

    def _describe(self) -> str:
        return f"Traversal depth limit {self.limit} exceeded at {self.event_id!r}"


__all__ = [
    "ChronolensError",
    "CycleDetectedError",
    "IngestionError",
    "InvalidDateError",
    "MalformedLineError",
    "PersistenceError",
    "TraversalDepthError",
]
