"""Operator confirmation with a deadline.

The answer is read on a daemon thread and collected with a bounded wait, so
a missing answer turns into ``TIMED_OUT`` instead of blocking forever. The
reader is injectable; tests pass a plain function instead of a terminal.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable
from enum import StrEnum

import typer

__all__ = ["Confirmation", "is_affirmative", "prompt_confirmation", "timed_confirm"]


class Confirmation(StrEnum):
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    TIMED_OUT = "timed_out"


def is_affirmative(answer: str) -> bool:
    return answer.strip().lower() in {"y", "yes"}


def timed_confirm(reader: Callable[[], str], *, timeout: float) -> Confirmation:
    """Call ``reader`` and classify its answer, giving up after ``timeout`` seconds."""
    answers: queue.Queue[str | None] = queue.Queue(maxsize=1)

    def read() -> None:
        try:
            answers.put(reader())
        except (EOFError, typer.Abort):
            # stdin closed or Ctrl-C at the prompt
            answers.put(None)

    threading.Thread(target=read, name="kb-confirm", daemon=True).start()

    try:
        answer = answers.get(timeout=timeout)
    except queue.Empty:
        return Confirmation.TIMED_OUT

    if answer is not None and is_affirmative(answer):
        return Confirmation.CONFIRMED
    return Confirmation.DECLINED


def prompt_confirmation(question: str, timeout: float) -> Confirmation:
    """Ask ``question`` on the terminal; anything but y/yes declines."""

    def reader() -> str:
        return typer.prompt(
            f"{question} (y/n, {timeout:g}s)",
            default="",
            show_default=False,
        )

    return timed_confirm(reader, timeout=timeout)
