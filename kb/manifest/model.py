"""The project manifest (``klarrio-build.json``).

Example:

    {
      "dockerRepository": "registry.example.com/team/service",
      "version": {
        "upstream": "3.0.0",
        "klarrio": "1.4.2"
      },
      "buildCommand": "rm -rf build; ./gradlew jar",
      "dockerFile": "docker/Dockerfile",
      "mainBranch": "master"
    }

``buildCommand`` runs through the shell with ``BUILD_VERSION`` and
``BUILD_DOCKER_TAG`` in its environment.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path

from kb.core.result import Err, Ok, Result
from kb.core.structured import StrDict, as_str_dict, get_str, get_table
from kb.release.errors import ConfigError
from kb.version.semver import SemVer, UpStep, increment, parse

__all__ = [
    "DEFAULT_DOCKERFILE",
    "DEFAULT_MAIN_BRANCH",
    "MANIFEST_FILENAME",
    "ProjectManifest",
    "load_manifest",
    "manifest_from_dict",
]


MANIFEST_FILENAME = "klarrio-build.json"
DEFAULT_DOCKERFILE = "Dockerfile"
DEFAULT_MAIN_BRANCH = "master"


@dataclass(frozen=True, slots=True)
class ProjectManifest:
    docker_repository: str
    upstream_version: str
    local_version: SemVer
    build_command: str
    dockerfile_path: str = DEFAULT_DOCKERFILE
    main_branch: str = DEFAULT_MAIN_BRANCH
    path: Path | None = None

    def with_bumped_local_version(self) -> ProjectManifest:
        """Copy with the local version advanced by one revision."""
        return replace(self, local_version=increment(self.local_version, UpStep.REVISION))


def load_manifest(path: Path) -> Result[ProjectManifest, ConfigError]:
    """Read and validate the manifest at ``path``."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ConfigError(f"could not find {path.name}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"could not read {path.name}: {e}", path=path))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"invalid {path.name}: {e}", path=path))

    data = as_str_dict(obj)
    if data is None:
        return Err(ConfigError(f"invalid {path.name}: root must be a JSON object", path=path))

    return manifest_from_dict(data, path=path)


def manifest_from_dict(
    data: StrDict, *, path: Path | None = None
) -> Result[ProjectManifest, ConfigError]:
    """Validate parsed manifest JSON.

    Required fields that are absent, null, not a string or blank fail with a
    ConfigError naming the field. Optional fields fall back to their defaults
    when absent or null.
    """
    name = path.name if path is not None else MANIFEST_FILENAME

    def missing(field: str) -> Err[ConfigError]:
        return Err(
            ConfigError(f"invalid {name}: missing '{field}' property", field=field, path=path)
        )

    docker_repository = get_str(data, "dockerRepository")
    if docker_repository is None:
        return missing("dockerRepository")

    version = get_table(data, "version") or {}
    upstream = get_str(version, "upstream")
    if upstream is None:
        return missing("version.upstream")

    local_raw = get_str(version, "klarrio")
    if local_raw is None:
        return missing("version.klarrio")
    local = parse(local_raw)
    if isinstance(local, Err):
        return Err(
            ConfigError(
                f"invalid {name}: 'version.klarrio' {local.error.message}",
                field="version.klarrio",
                path=path,
            )
        )

    build_command = get_str(data, "buildCommand")
    if build_command is None:
        return missing("buildCommand")

    optional: dict[str, str] = {}
    for field, default in (("dockerFile", DEFAULT_DOCKERFILE), ("mainBranch", DEFAULT_MAIN_BRANCH)):
        raw = data.get(field)
        if raw is None:
            optional[field] = default
            continue
        if not isinstance(raw, str) or not raw.strip():
            return Err(
                ConfigError(
                    f"invalid {name}: '{field}' must be a non-empty string",
                    field=field,
                    path=path,
                )
            )
        optional[field] = raw.strip()

    return Ok(
        ProjectManifest(
            docker_repository=docker_repository,
            upstream_version=upstream,
            local_version=local.value,
            build_command=build_command,
            dockerfile_path=optional["dockerFile"],
            main_branch=optional["mainBranch"],
            path=path,
        )
    )
