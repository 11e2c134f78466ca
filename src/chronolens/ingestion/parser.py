"""
Line Parser: one delimited text line plus a header into an :class:`Event`.

Input format
------------
UTF-8 text, one record per line, fields separated by ``|``. The header row
names the fields in camelCase; names are converted to snake_case before use,
so a header of ``eventId|eventName|description|startDate|endDate|parentId|researchValue``
yields the keys ``event_id``, ``event_name`` ... ``parent_id``.

Rules
-----
- The number of fields must equal the header's, else :class:`MalformedLineError`.
- ``parent_id`` equal to the NULL literal means "no parent"; any other text is
  taken verbatim as the parent id.
- ``start_date`` / ``end_date`` are ISO-8601; naive values are read as UTC.
  Unparsable or missing dates raise :class:`InvalidDateError`.
- ``event_id`` is not validated unless ``strict_ids`` is set.

The functions here are pure; nothing touches the store.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime

from chronolens.core.contracts.event import Event, EventMetadata, as_utc
from chronolens.core.errors import IngestionError, InvalidDateError, MalformedLineError
from chronolens.core.result import Result, err, ok

DEFAULT_DELIMITER = "|"
DEFAULT_NULL_LITERAL = "NULL"

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def camel_to_snake(name: str) -> str:
    """Convert ``parentId`` style names to ``parent_id``."""
    return _CAMEL_BOUNDARY.sub(r"\1_\2", name).lower()


def split_header(line: str, delimiter: str = DEFAULT_DELIMITER) -> list[str]:
    """Split a header row into its raw field names."""
    return [name.strip() for name in line.strip().split(delimiter)]


def parse_datetime(raw: str | None) -> datetime | None:
    """Parse an ISO-8601 date or date-time; return None when it cannot be read."""
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        value = datetime.fromisoformat(text)
    except ValueError:
        return None
    return as_utc(value)


def parse_line(
    headers: Sequence[str],
    line: str,
    line_number: int,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    null_literal: str = DEFAULT_NULL_LITERAL,
    strict_ids: bool = False,
) -> Event:
    """Parse ``line`` against ``headers`` and return the resulting event.

    Raises
    ------
    MalformedLineError
        Field count differs from the header, or ``strict_ids`` is on and the
        event id is blank.
    InvalidDateError
        Either date is missing or unparsable.
    """
    values = line.strip().split(delimiter)
    if len(values) != len(headers):
        raise MalformedLineError(f"Malformed entry at line {line_number}", line_number)

    row = {camel_to_snake(key): value for key, value in zip(headers, values, strict=True)}

    event_id = row.get("event_id", "")
    if strict_ids and not event_id.strip():
        raise MalformedLineError(f"Missing event id at line {line_number}", line_number)

    start_date = parse_datetime(row.get("start_date"))
    end_date = parse_datetime(row.get("end_date"))
    if start_date is None or end_date is None:
        raise InvalidDateError(f"Invalid date at line {line_number}", line_number)

    parent_raw = row.get("parent_id")
    parent_event_id = None if parent_raw is None or parent_raw == null_literal else parent_raw

    return Event(
        event_id=event_id,
        event_name=row.get("event_name", ""),
        description=row.get("description", ""),
        start_date=start_date,
        end_date=end_date,
        parent_event_id=parent_event_id,
        research_value=row.get("research_value", ""),
        metadata=EventMetadata(line=line_number),
    )


def try_parse_line(
    headers: Sequence[str],
    line: str,
    line_number: int,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    null_literal: str = DEFAULT_NULL_LITERAL,
    strict_ids: bool = False,
) -> Result[Event, IngestionError]:
    """Same as :func:`parse_line` but returns the failure as ``Err``."""
    try:
        return ok(
            parse_line(
                headers,
                line,
                line_number,
                delimiter=delimiter,
                null_literal=null_literal,
                strict_ids=strict_ids,
            )
        )
    except IngestionError as exc:
        return err(exc)


__all__ = [
    "camel_to_snake",
    "parse_datetime",
    "parse_line",
    "split_header",
    "try_parse_line",
]
