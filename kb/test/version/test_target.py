from __future__ import annotations

import pytest

from kb.manifest.model import ProjectManifest
from kb.version.semver import SemVer, UpStep
from kb.version.target import (
    Mode,
    ProjectVersion,
    compute_target,
    next_local_version,
    parse_mode,
)


def _manifest(local: SemVer = SemVer(1, 4, 2)) -> ProjectManifest:
    return ProjectManifest(
        docker_repository="registry.example.com/team/svc",
        upstream_version="3.0.0",
        local_version=local,
        build_command="make",
    )


def test_snapshot_uses_current_local_version() -> None:
    target = compute_target(_manifest(), Mode.SNAPSHOT, UpStep.MAJOR)

    assert str(target.version) == "3.0.0-1.4.2"
    assert target.docker_tag == "registry.example.com/team/svc:3.0.0-1.4.2-SNAPSHOT"
    assert target.upstep is UpStep.REVISION


@pytest.mark.parametrize(
    ("upstep", "expected"),
    [
        (UpStep.MAJOR, "3.0.0-2.0.0"),
        (UpStep.MINOR, "3.0.0-1.5.0"),
        (UpStep.REVISION, "3.0.0-1.4.3"),
    ],
)
def test_release_increments_local_version(upstep: UpStep, expected: str) -> None:
    target = compute_target(_manifest(), Mode.RELEASE, upstep)

    assert target.version_string == expected
    assert target.docker_tag == f"registry.example.com/team/svc:{expected}"


def test_compute_target_does_not_mutate_manifest() -> None:
    manifest = _manifest()
    compute_target(manifest, Mode.RELEASE, UpStep.MAJOR)
    assert manifest.local_version == SemVer(1, 4, 2)


def test_next_local_version_is_revision_bump_of_pre_release() -> None:
    assert next_local_version(_manifest()) == ProjectVersion("3.0.0", SemVer(1, 4, 3))


def test_upstream_version_is_opaque() -> None:
    manifest = ProjectManifest(
        docker_repository="repo",
        upstream_version="2.8.1-scala_2.13",
        local_version=SemVer(0, 1, 0),
        build_command="make",
    )
    target = compute_target(manifest, Mode.SNAPSHOT, UpStep.REVISION)
    assert target.docker_tag == "repo:2.8.1-scala_2.13-0.1.0-SNAPSHOT"


@pytest.mark.parametrize(
    ("text", "mode"),
    [
        ("snapshot", Mode.SNAPSHOT),
        ("snap", Mode.SNAPSHOT),
        ("s", Mode.SNAPSHOT),
        ("release", Mode.RELEASE),
        ("rel", Mode.RELEASE),
        ("r", Mode.RELEASE),
        ("RELEASE", Mode.RELEASE),
    ],
)
def test_parse_mode(text: str, mode: Mode) -> None:
    assert parse_mode(text) is mode


@pytest.mark.parametrize("text", ["", "publish", "snapshots", "x"])
def test_parse_mode_rejects_unknown(text: str) -> None:
    assert parse_mode(text) is None
