from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from kb.core.result import Err, Ok, Result
from kb.git.repository import Repository
from kb.manifest.model import ProjectManifest, load_manifest
from kb.output.console import ConsoleProtocol
from kb.release.errors import ConfigError, PrereqMissing
from kb.release.prereqs import check_prerequisites


@dataclass(frozen=True, slots=True)
class CLIContext:
    console: ConsoleProtocol
    manifest: ProjectManifest
    repo: Repository
    project_root: Path


def build_context(
    manifest_path: Path,
    *,
    console: ConsoleProtocol,
) -> Result[CLIContext, PrereqMissing | ConfigError]:
    """Check prerequisites, load the manifest and open the repository around it.

    The project root is the directory holding the manifest; builds, docker
    and git all run there.
    """
    path = manifest_path.expanduser().resolve()

    prereqs = check_prerequisites(path)
    if isinstance(prereqs, Err):
        return prereqs

    manifest = load_manifest(path)
    if isinstance(manifest, Err):
        return manifest

    root = path.parent
    return Ok(
        CLIContext(
            console=console,
            manifest=manifest.value,
            repo=Repository(root),
            project_root=root,
        )
    )
