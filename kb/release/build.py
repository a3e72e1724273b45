"""Running the project's own build command."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from kb.core.result import Err, Ok, Result
from kb.output.console import ConsoleProtocol, Style
from kb.platform.process import run_streaming
from kb.release.errors import StepFailure

__all__ = ["BuildInputs", "run_build_command"]


@dataclass(frozen=True, slots=True)
class BuildInputs:
    """What the build command gets to know about the artifact it builds."""

    version: str
    docker_tag: str

    def as_env(self) -> dict[str, str]:
        return {"BUILD_VERSION": self.version, "BUILD_DOCKER_TAG": self.docker_tag}


def run_build_command(
    command: str,
    inputs: BuildInputs,
    *,
    cwd: Path,
    console: ConsoleProtocol,
    base_env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> Result[None, StepFailure]:
    """Run ``command`` through ``sh -c`` with the build inputs in its environment.

    The inputs are added to a copy of ``base_env`` (the current environment by
    default) handed to the child only.
    """
    env = dict(os.environ if base_env is None else base_env)
    env.update(inputs.as_env())

    for key, value in inputs.as_env().items():
        console.print(f"{key}={value}", Style.DIM)
    console.print(f"sh -c {command!r}", Style.DIM)
    if dry_run:
        return Ok(None)

    result = run_streaming(["sh", "-c", command], cwd=cwd, env=env)
    if isinstance(result, Err):
        e = result.error
        return Err(
            StepFailure(
                step="build",
                message=f"build command failed (exit {e.returncode})",
                hint=e.stderr.strip() or command,
            )
        )
    return Ok(None)
