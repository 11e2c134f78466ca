"""Unit tests for the Result container used by the ingestion loop."""

from __future__ import annotations

import pytest

from chronolens.core.result import Err, Ok, Result, err, ok


def test_ok_holds_value() -> None:
    r: Result[int, str] = ok(90)
    assert r.is_ok() and not r.is_err()
    assert isinstance(r, Ok) and r.unwrap() == 90


def test_err_holds_error() -> None:
    r: Result[int, str] = err("bad line")
    assert r.is_err() and not r.is_ok()
    assert isinstance(r, Err) and r.unwrap_err() == "bad line"


def test_unwrap_variants() -> None:
    assert ok("x").unwrap() == "x"
    assert err("e").unwrap(default="fallback") == "fallback"
    with pytest.raises(RuntimeError):
        err("e").unwrap()
    with pytest.raises(RuntimeError):
        ok(1).unwrap_err()
