"""Error presentation: one red line, an optional dim hint, an exit code."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kb.core.errors import ErrorCode
from kb.output.console import Style
from kb.release.errors import (
    AbortedByOperator,
    ConfigError,
    FormatError,
    GateDenied,
    PrereqMissing,
    ReleaseError,
    StepFailure,
    UsageError,
)

if TYPE_CHECKING:
    from kb.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error:
        case UsageError() | AbortedByOperator():
            return int(ErrorCode.USER_ERROR)
        case PrereqMissing():
            return int(ErrorCode.ENV_ERROR)
        case ConfigError() | FormatError():
            return int(ErrorCode.CONFIG_ERROR)
        case GateDenied():
            return int(ErrorCode.GATE_DENIED)
        case StepFailure():
            return int(ErrorCode.STEP_FAILED)
