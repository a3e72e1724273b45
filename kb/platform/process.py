"""Subprocess execution returning Results.

``run`` captures output and is used for git queries whose output gets
parsed. ``run_streaming`` leaves the child attached to the terminal for the
build command and docker, whose output the operator wants to watch.

A non-zero exit, a missing executable and a timeout all come back as
``Err(ProcessError)``; nothing here raises for them.
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from kb.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_streaming"]

# argv items shown when describing a failed command
_SHOWN_ARGS = 3


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not be run or exited non-zero.

    Attributes:
        command: The argv that was executed.
        returncode: Exit code, or -1 if the process never ran or timed out.
        stdout: Captured standard output (empty when streaming).
        stderr: Captured standard error, or the OS / timeout message.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = list(self.command[:_SHOWN_ARGS])
        if len(self.command) > _SHOWN_ARGS:
            shown.append("...")
        return f"{' '.join(shown)} exited with code {self.returncode}"


def _launch(
    cmd: list[str], cwd: Path, env: Mapping[str, str] | None, **kwargs: Any
) -> Result[subprocess.CompletedProcess[str], ProcessError]:
    argv = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=None if env is None else dict(env),
            text=True,
            check=False,
            **kwargs,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return Err(ProcessError(argv, -1, partial, f"timed out after {e.timeout:g}s"))
    except OSError as e:
        return Err(ProcessError(argv, -1, "", str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(argv, proc.returncode, proc.stdout or "", proc.stderr or ""))
    return Ok(proc)


def run(
    cmd: list[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run a command, capturing its output; ``Ok(stdout)`` on exit 0."""
    result = _launch(cmd, cwd, env, capture_output=True, timeout=timeout)
    if isinstance(result, Err):
        return result
    return Ok(result.value.stdout)


def run_streaming(
    cmd: list[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Run a command attached to the terminal and wait for it.

    There is no timeout: builds and image pushes take as long as they take.
    """
    result = _launch(cmd, cwd, env)
    if isinstance(result, Err):
        return result
    return Ok(None)
