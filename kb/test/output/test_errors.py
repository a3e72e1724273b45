from __future__ import annotations

from pathlib import Path

import pytest

from kb.core.errors import ErrorCode
from kb.output.console import MockConsole, Style
from kb.output.errors import print_release_error, release_error_exit_code
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


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (UsageError("bad flags"), ErrorCode.USER_ERROR),
        (AbortedByOperator("declined"), ErrorCode.USER_ERROR),
        (PrereqMissing(name="docker", hint="install docker"), ErrorCode.ENV_ERROR),
        (ConfigError("invalid klarrio-build.json"), ErrorCode.CONFIG_ERROR),
        (FormatError("1.2"), ErrorCode.CONFIG_ERROR),
        (GateDenied(reason="ahead", message="ahead"), ErrorCode.GATE_DENIED),
        (StepFailure(step="container_push", message="push failed"), ErrorCode.STEP_FAILED),
    ],
)
def test_exit_codes(error: ReleaseError, code: ErrorCode) -> None:
    assert release_error_exit_code(error) == int(code)


def test_prints_message_and_hint() -> None:
    console = MockConsole()
    error = ConfigError("invalid klarrio-build.json", path=Path("/p/klarrio-build.json"))

    print_release_error(error, console)

    assert console.messages == [
        "error: invalid klarrio-build.json",
        "hint: check /p/klarrio-build.json",
    ]
    assert console.outputs[1].style == Style.DIM


def test_no_hint_line_without_hint() -> None:
    console = MockConsole()
    print_release_error(AbortedByOperator("timed_out"), console)

    assert console.messages == ["error: no confirmation received in time; aborting"]
