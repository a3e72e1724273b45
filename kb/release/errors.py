"""Errors that stop a build or release.

Every error has a ``message`` and an optional ``hint``, so the CLI can render
any of them the same way (see ``kb.output.errors``).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from kb.version.semver import FormatError

__all__ = [
    "AbortedByOperator",
    "ConfigError",
    "FormatError",
    "GateDenied",
    "GateReason",
    "PrereqMissing",
    "ReleaseError",
    "StepFailure",
    "StepName",
    "UsageError",
]


GateReason = Literal["wrong_branch", "behind", "ahead", "dirty"]

StepName = Literal["git", "build", "container_build", "container_push", "tag", "persist"]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """The manifest is missing, unreadable or has an invalid field."""

    message: str
    field: str | None = None
    path: Path | None = None

    @property
    def hint(self) -> str | None:
        if self.path is None:
            return None
        return f"check {self.path}"


@dataclass(frozen=True, slots=True)
class UsageError:
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class PrereqMissing:
    name: str
    hint: str

    @property
    def message(self) -> str:
        return f"{self.name}: missing"


@dataclass(frozen=True, slots=True)
class GateDenied:
    reason: GateReason
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class AbortedByOperator:
    outcome: Literal["declined", "timed_out"]

    @property
    def message(self) -> str:
        if self.outcome == "timed_out":
            return "no confirmation received in time; aborting"
        return "you have changed your mind; aborting"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class StepFailure:
    step: StepName
    message: str
    hint: str | None = None


ReleaseError = (
    ConfigError
    | FormatError
    | UsageError
    | PrereqMissing
    | GateDenied
    | AbortedByOperator
    | StepFailure
)
