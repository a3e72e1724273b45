"""Release targets: the version string and docker tag of one invocation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from kb.version.semver import SemVer, UpStep, increment

if TYPE_CHECKING:
    from kb.manifest.model import ProjectManifest

__all__ = [
    "Mode",
    "ProjectVersion",
    "ReleaseTarget",
    "SNAPSHOT_SUFFIX",
    "compute_target",
    "next_local_version",
    "parse_mode",
]


SNAPSHOT_SUFFIX = "-SNAPSHOT"

_MODE_ALIASES = {
    "snapshot": "snapshot",
    "snap": "snapshot",
    "s": "snapshot",
    "release": "release",
    "rel": "release",
    "r": "release",
}


class Mode(StrEnum):
    SNAPSHOT = "snapshot"
    RELEASE = "release"


def parse_mode(text: str) -> Mode | None:
    """Resolve a mode name or one of its short aliases."""
    name = _MODE_ALIASES.get(text.strip().lower())
    return Mode(name) if name is not None else None


@dataclass(frozen=True, slots=True)
class ProjectVersion:
    """Upstream version (opaque) paired with the project-local semver."""

    upstream: str
    local: SemVer

    def __str__(self) -> str:
        return f"{self.upstream}-{self.local}"


@dataclass(frozen=True, slots=True)
class ReleaseTarget:
    mode: Mode
    upstep: UpStep
    version: ProjectVersion
    docker_tag: str

    @property
    def version_string(self) -> str:
        return str(self.version)


def compute_target(manifest: ProjectManifest, mode: Mode, upstep: UpStep) -> ReleaseTarget:
    """Compute the version and docker tag for a snapshot or a release.

    A snapshot publishes the current local version with a ``-SNAPSHOT`` tag
    suffix; the up-step is always revision and is not applied. A release
    publishes the local version incremented by ``upstep``.
    """
    if mode is Mode.SNAPSHOT:
        version = ProjectVersion(manifest.upstream_version, manifest.local_version)
        return ReleaseTarget(
            mode=mode,
            upstep=UpStep.REVISION,
            version=version,
            docker_tag=f"{manifest.docker_repository}:{version}{SNAPSHOT_SUFFIX}",
        )

    version = ProjectVersion(
        manifest.upstream_version, increment(manifest.local_version, upstep)
    )
    return ReleaseTarget(
        mode=mode,
        upstep=upstep,
        version=version,
        docker_tag=f"{manifest.docker_repository}:{version}",
    )


def next_local_version(manifest: ProjectManifest) -> ProjectVersion:
    """The version the manifest advances to after a successful release.

    Always a revision bump of the pre-release local version, whatever up-step
    the release itself used.
    """
    return ProjectVersion(
        manifest.upstream_version, increment(manifest.local_version, UpStep.REVISION)
    )
