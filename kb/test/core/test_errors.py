"""Tests for kb.core.errors module."""

from kb.core.errors import ErrorCode


def test_exit_code_values_are_stable() -> None:
    assert int(ErrorCode.OK) == 0
    assert int(ErrorCode.USER_ERROR) == 1
    assert int(ErrorCode.ENV_ERROR) == 2
    assert int(ErrorCode.CONFIG_ERROR) == 3
    assert int(ErrorCode.GATE_DENIED) == 4
    assert int(ErrorCode.STEP_FAILED) == 5

