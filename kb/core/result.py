"""Result type for the release pipeline.

Every step of a build or release returns either ``Ok(value)`` or
``Err(error)``. The orchestrator inspects the result and stops at the first
``Err``; nothing in the service layer raises for an expected failure.

Usage:
    match parse("1.4.2"):
        case Ok(version):
            console.info(f"local version {version}")
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful step carrying its value."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed step carrying the error that stopped it."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
