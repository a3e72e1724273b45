from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

from kb.core.result import Err, Ok, Result
from kb.release.errors import PrereqMissing

__all__ = ["REQUIRED_TOOLS", "check_prerequisites"]


REQUIRED_TOOLS: dict[str, str] = {
    "git": "You need git to run this tool.",
    "docker": "You need docker to run this tool.",
}


def check_prerequisites(
    manifest_path: Path,
    *,
    which: Callable[[str], str | None] = shutil.which,
) -> Result[None, PrereqMissing]:
    """Make sure the manifest exists and git and docker are on PATH."""
    if not manifest_path.is_file():
        return Err(
            PrereqMissing(
                name=manifest_path.name,
                hint=f"could not find {manifest_path}; run from the project root "
                "or pass --manifest",
            )
        )
    for tool, hint in REQUIRED_TOOLS.items():
        if which(tool) is None:
            return Err(PrereqMissing(name=tool, hint=hint))
    return Ok(None)
