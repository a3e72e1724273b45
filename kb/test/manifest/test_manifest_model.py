"""Tests for kb.manifest.model."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from kb.core.result import Err, Ok
from kb.manifest.model import ProjectManifest, load_manifest, manifest_from_dict
from kb.version.semver import SemVer


def _data(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "dockerRepository": "registry.example.com/team/svc",
        "version": {"upstream": "3.0.0", "klarrio": "1.4.2"},
        "buildCommand": "./gradlew jar",
        "dockerFile": "docker/Dockerfile",
        "mainBranch": "main",
    }
    data.update(overrides)
    return data


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "klarrio-build.json"
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


class TestLoadManifest:
    def test_loads_all_fields(self, tmp_path: Path) -> None:
        path = _write(tmp_path, _data())

        result = load_manifest(path)

        assert result == Ok(
            ProjectManifest(
                docker_repository="registry.example.com/team/svc",
                upstream_version="3.0.0",
                local_version=SemVer(1, 4, 2),
                build_command="./gradlew jar",
                dockerfile_path="docker/Dockerfile",
                main_branch="main",
                path=path,
            )
        )

    def test_defaults_for_optional_fields(self, tmp_path: Path) -> None:
        data = _data()
        del data["dockerFile"]
        data["mainBranch"] = None

        result = load_manifest(_write(tmp_path, data))

        assert isinstance(result, Ok)
        assert result.value.dockerfile_path == "Dockerfile"
        assert result.value.main_branch == "master"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_manifest(tmp_path / "klarrio-build.json")

        assert isinstance(result, Err)
        assert "could not find" in result.error.message

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "klarrio-build.json"
        path.write_text("{ not json", encoding="utf-8")

        result = load_manifest(path)

        assert isinstance(result, Err)
        assert result.error.path == path

    def test_root_must_be_object(self, tmp_path: Path) -> None:
        result = load_manifest(_write(tmp_path, ["a", "b"]))

        assert isinstance(result, Err)
        assert "JSON object" in result.error.message


class TestManifestFromDict:
    @pytest.mark.parametrize(
        ("field", "data"),
        [
            ("dockerRepository", _data(dockerRepository=None)),
            ("dockerRepository", _data(dockerRepository="")),
            ("dockerRepository", _data(dockerRepository="   ")),
            ("version.upstream", _data(version={"klarrio": "1.0.0"})),
            ("version.upstream", _data(version={"upstream": None, "klarrio": "1.0.0"})),
            ("version.klarrio", _data(version={"upstream": "3.0.0"})),
            ("version.klarrio", _data(version={"upstream": "3.0.0", "klarrio": ""})),
            ("version.upstream", _data(version=None)),
            ("buildCommand", _data(buildCommand=None)),
            ("buildCommand", _data(buildCommand=42)),
        ],
    )
    def test_missing_required_field_is_named(self, field: str, data: dict[str, object]) -> None:
        result = manifest_from_dict(data)

        assert isinstance(result, Err)
        assert result.error.field == field
        assert f"'{field}'" in result.error.message

    def test_fields_checked_in_schema_order(self) -> None:
        result = manifest_from_dict({})

        assert isinstance(result, Err)
        assert result.error.field == "dockerRepository"

    def test_invalid_local_version(self) -> None:
        result = manifest_from_dict(_data(version={"upstream": "3.0.0", "klarrio": "1.2"}))

        assert isinstance(result, Err)
        assert result.error.field == "version.klarrio"
        assert "invalid version format" in result.error.message

    def test_upstream_version_need_not_be_semver(self) -> None:
        result = manifest_from_dict(_data(version={"upstream": "2.8-rc1", "klarrio": "0.0.1"}))

        assert isinstance(result, Ok)
        assert result.value.upstream_version == "2.8-rc1"

    def test_optional_field_wrong_type(self) -> None:
        result = manifest_from_dict(_data(dockerFile=["Dockerfile"]))

        assert isinstance(result, Err)
        assert result.error.field == "dockerFile"


def test_with_bumped_local_version_is_a_revision_bump() -> None:
    result = manifest_from_dict(_data())
    assert isinstance(result, Ok)
    manifest = result.value

    bumped = manifest.with_bumped_local_version()

    assert bumped.local_version == SemVer(1, 4, 3)
    assert manifest.local_version == SemVer(1, 4, 2)
    assert bumped.docker_repository == manifest.docker_repository
