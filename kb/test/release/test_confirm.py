from __future__ import annotations

import threading

import pytest
import typer

from kb.release.confirm import Confirmation, is_affirmative, timed_confirm


@pytest.mark.parametrize("answer", ["y", "Y", "yes", " YES "])
def test_affirmative_answers(answer: str) -> None:
    assert is_affirmative(answer)


@pytest.mark.parametrize("answer", ["", "n", "no", "yep", "sure"])
def test_anything_else_is_not_affirmative(answer: str) -> None:
    assert not is_affirmative(answer)


def test_yes_confirms() -> None:
    assert timed_confirm(lambda: "y", timeout=1.0) is Confirmation.CONFIRMED


def test_no_declines() -> None:
    assert timed_confirm(lambda: "n", timeout=1.0) is Confirmation.DECLINED


def test_closed_stdin_declines() -> None:
    def reader() -> str:
        raise EOFError

    assert timed_confirm(reader, timeout=1.0) is Confirmation.DECLINED


def test_interrupted_prompt_declines() -> None:
    def reader() -> str:
        raise typer.Abort()

    assert timed_confirm(reader, timeout=1.0) is Confirmation.DECLINED


def test_no_answer_times_out() -> None:
    release = threading.Event()

    def reader() -> str:
        release.wait(5.0)
        return "y"

    try:
        assert timed_confirm(reader, timeout=0.05) is Confirmation.TIMED_OUT
    finally:
        release.set()
