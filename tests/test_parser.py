"""Unit tests for the pipe-delimited line parser."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from factories import HEADER, line

from chronolens.core.errors import InvalidDateError, MalformedLineError
from chronolens.ingestion.parser import (
    camel_to_snake,
    parse_datetime,
    parse_line,
    split_header,
    try_parse_line,
)

HEADERS = split_header(HEADER)


def test_camel_to_snake_conversions() -> None:
    assert camel_to_snake("parentId") == "parent_id"
    assert camel_to_snake("startDate") == "start_date"
    assert camel_to_snake("researchValue") == "research_value"
    assert camel_to_snake("description") == "description"


def test_parse_valid_line_populates_every_field() -> None:
    raw = line("e1", "2020-01-01T10:00:00Z", "2020-01-01T11:30:00Z", parent="p0", name="Treaty")
    event = parse_line(HEADERS, raw, 2)

    assert event.event_id == "e1"
    assert event.event_name == "Treaty"
    assert event.description == "Desc of e1"
    assert event.start_date == datetime(2020, 1, 1, 10, 0, tzinfo=UTC)
    assert event.end_date == datetime(2020, 1, 1, 11, 30, tzinfo=UTC)
    assert event.duration_minutes == 90
    assert event.parent_event_id == "p0"
    assert event.research_value == "medium"
    assert event.metadata is not None and event.metadata.line == 2


def test_null_literal_means_no_parent() -> None:
    event = parse_line(HEADERS, line("e1", "2020-01-01", "2020-01-02"), 2)
    assert event.parent_event_id is None
    assert event.duration_minutes == 24 * 60


def test_field_count_mismatch_is_malformed() -> None:
    with pytest.raises(MalformedLineError, match="line 7"):
        parse_line(HEADERS, "e1|only|three", 7)


def test_unparsable_date_is_invalid() -> None:
    with pytest.raises(InvalidDateError, match="line 4"):
        parse_line(HEADERS, line("e1", "yesterday", "2020-01-01T00:00:00Z"), 4)


def test_negative_duration_is_kept() -> None:
    event = parse_line(HEADERS, line("e1", "2020-01-01T10:00:00Z", "2020-01-01T09:59:30Z"), 2)
    # floor(-0.5) == -1
    assert event.duration_minutes == -1


def test_event_id_is_not_validated_by_default() -> None:
    event = parse_line(HEADERS, line("", "2020-01-01", "2020-01-02"), 2)
    assert event.event_id == ""


def test_strict_ids_rejects_blank_id() -> None:
    with pytest.raises(MalformedLineError, match="event id"):
        parse_line(HEADERS, line(" ", "2020-01-01", "2020-01-02"), 3, strict_ids=True)


def test_parse_datetime_accepts_naive_and_zulu() -> None:
    assert parse_datetime("2020-01-01 10:00") == datetime(2020, 1, 1, 10, tzinfo=UTC)
    assert parse_datetime("2020-01-01T10:00:00Z") == datetime(2020, 1, 1, 10, tzinfo=UTC)
    assert parse_datetime("") is None
    assert parse_datetime("31/12/2020") is None


def test_try_parse_line_wraps_failures() -> None:
    good = try_parse_line(HEADERS, line("e1", "2020-01-01", "2020-01-02"), 2)
    bad = try_parse_line(HEADERS, "a|b", 3)

    assert good.is_ok() and good.unwrap().event_id == "e1"
    assert bad.is_err()
    assert isinstance(bad.unwrap_err(), MalformedLineError)
    assert str(bad.unwrap_err()) == "Malformed entry at line 3"
