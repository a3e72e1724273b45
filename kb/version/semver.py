"""Project-local semantic versions.

A local version is exactly three dot-separated non-negative integers
(``major.minor.revision``). Nothing else is accepted: no ``v`` prefix, no
pre-release or build suffix, no surrounding whitespace.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from kb.core.result import Err, Ok, Result

__all__ = ["FormatError", "SemVer", "UpStep", "increment", "parse"]


_SEMVER_RE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")


class UpStep(StrEnum):
    """Which component of the local version a release increments."""

    MAJOR = "major"
    MINOR = "minor"
    REVISION = "revision"


@dataclass(frozen=True, slots=True)
class FormatError:
    text: str

    @property
    def message(self) -> str:
        return f"invalid version format: {self.text!r} (expected MAJOR.MINOR.REVISION)"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    revision: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.revision}"


def parse(text: str) -> Result[SemVer, FormatError]:
    m = _SEMVER_RE.fullmatch(text)
    if m is None:
        return Err(FormatError(text))
    return Ok(SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3))))


def increment(version: SemVer, component: UpStep | str) -> SemVer:
    """Return the next version for ``component``; lower components reset to 0.

    Raises:
        ValueError: ``component`` is not major, minor or revision.
    """
    match UpStep(component):
        case UpStep.MAJOR:
            return SemVer(version.major + 1, 0, 0)
        case UpStep.MINOR:
            return SemVer(version.major, version.minor + 1, 0)
        case UpStep.REVISION:
            return SemVer(version.major, version.minor, version.revision + 1)
