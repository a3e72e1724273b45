"""Docker image build and push."""

from __future__ import annotations

from pathlib import Path

from kb.core.result import Err, Ok, Result
from kb.output.console import ConsoleProtocol, Style
from kb.platform.process import run_streaming
from kb.release.errors import StepFailure

__all__ = ["DockerClient"]


class DockerClient:
    """Thin wrapper over the docker CLI; output streams to the terminal."""

    def __init__(self, *, console: ConsoleProtocol, executable: str = "docker") -> None:
        self._console = console
        self._executable = executable

    def build_image(
        self,
        *,
        tag: str,
        dockerfile: str,
        context: Path,
        dry_run: bool = False,
    ) -> Result[None, StepFailure]:
        cmd = [self._executable, "build", "--no-cache", "-t", tag, "-f", dockerfile, "."]
        self._console.print(" ".join(cmd), Style.DIM)
        if dry_run:
            return Ok(None)

        result = run_streaming(cmd, cwd=context)
        if isinstance(result, Err):
            e = result.error
            return Err(
                StepFailure(
                    step="container_build",
                    message=f"docker build failed for {tag} (exit {e.returncode})",
                    hint=e.stderr.strip() or f"dockerfile: {dockerfile}",
                )
            )
        return Ok(None)

    def push_image(
        self,
        *,
        tag: str,
        context: Path,
        dry_run: bool = False,
    ) -> Result[None, StepFailure]:
        cmd = [self._executable, "push", tag]
        self._console.print(" ".join(cmd), Style.DIM)
        if dry_run:
            return Ok(None)

        result = run_streaming(cmd, cwd=context)
        if isinstance(result, Err):
            e = result.error
            return Err(
                StepFailure(
                    step="container_push",
                    message=f"docker push failed for {tag} (exit {e.returncode})",
                    hint=e.stderr.strip() or "the image is built locally but was not published",
                )
            )
        return Ok(None)
