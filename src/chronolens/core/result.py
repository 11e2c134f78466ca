"""Typed Result container for per-line ingestion outcomes.

The ingestion runner folds a stream of parse outcomes into a job record. Each
outcome is either ``Ok(event)`` or ``Err(error)``; keeping failures as values
means one bad line never unwinds the loop that is consuming the file.

Surface
-------
- ``Ok(value)`` / ``Err(error)`` variants plus ``ok`` / ``err`` constructors,
- ``is_ok`` / ``is_err`` introspection,
- ``unwrap`` (with optional default) and ``unwrap_err``.

Example
-------
>>> from chronolens.core.result import ok, err, Result
>>> def minutes(x: str) -> Result[int, str]:
...     return ok(int(x)) if x.isdigit() else err(f"not a number: {x}")
>>> minutes("90").unwrap()
90
>>> minutes("n/a").unwrap(default=0)
0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, cast

T = TypeVar("T")
E = TypeVar("E")


class Result(Generic[T, E]):
    """Either a success (`Ok[T]`) or a failure (`Err[E]`)."""

    def is_ok(self) -> bool:
        """Return ``True`` if this is an :class:`Ok` value."""
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` if this is an :class:`Err` value."""
        return isinstance(self, Err)

    def unwrap(self, default: T | None = None) -> T:
        """Return the success value, ``default`` on ``Err``, or raise.

        A :class:`RuntimeError` is raised when this is ``Err`` and no
        default was supplied.
        """
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        if default is not None:
            return default
        raise RuntimeError(f"Attempted to unwrap Err: {self!r}")

    def unwrap_err(self) -> E:
        """Return the error value if ``Err``, else raise."""
        if isinstance(self, Err):
            return cast(Err[T, E], self).error
        raise RuntimeError(f"Attempted to unwrap_err on Ok: {self!r}")

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        if isinstance(self, Ok):
            return f"Ok({cast(Ok[T, E], self).value!r})"
        if isinstance(self, Err):
            return f"Err({cast(Err[T, E], self).error!r})"
        return "Result(?)"


@dataclass(frozen=True)
class Ok(Result[T, E]):
    """Successful result wrapping a value of type ``T``."""

    value: T


@dataclass(frozen=True)
class Err(Result[T, E]):
    """Failed result wrapping an error payload of type ``E``."""

    error: E


def ok(value: T) -> Result[T, E]:
    """Construct :class:`Ok` with better type inference at call sites."""
    return Ok(value)


def err(error: E) -> Result[T, E]:
    """Construct :class:`Err` with better type inference at call sites."""
    return Err(error)
