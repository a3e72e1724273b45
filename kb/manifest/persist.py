"""Writing the advanced local version back and publishing it."""

from __future__ import annotations

import copy
import json
import re

from kb.core.result import Err, Ok, Result
from kb.core.structured import StrDict, as_str_dict, get_table
from kb.git.repository import Repository
from kb.manifest.model import ProjectManifest
from kb.output.console import ConsoleProtocol, Style
from kb.platform.files import atomic_write_text
from kb.release.errors import ConfigError, StepFailure
from kb.version.target import ProjectVersion

__all__ = ["commit_message", "persist_local_version", "write_local_version"]


_LOCAL_VERSION_RE = re.compile(r'("klarrio"\s*:\s*)"((?:[^"\\]|\\.)*)"')


def commit_message(manifest: ProjectManifest) -> str:
    version = ProjectVersion(manifest.upstream_version, manifest.local_version)
    return f"upstep release version to {version}"


def write_local_version(manifest: ProjectManifest) -> Result[bool, ConfigError]:
    """Rewrite ``version.klarrio`` in the manifest file, touching nothing else.

    The value is replaced in the file text so key order, indentation and every
    other field survive byte for byte. If the text cannot be patched
    unambiguously, the document is re-serialized instead. The result is
    re-parsed and compared before the file is replaced.

    Returns:
        Ok(True) if the file changed, Ok(False) if it already held the version.
    """
    path = manifest.path
    if path is None:
        return Err(ConfigError("manifest has no file to write to"))

    new_value = str(manifest.local_version)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(ConfigError(f"could not read {path.name}: {e}", path=path))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"invalid {path.name}: {e}", path=path))

    data = as_str_dict(obj)
    version = get_table(data, "version") if data is not None else None
    if data is None or version is None:
        return Err(
            ConfigError(f"invalid {path.name}: no 'version' object", field="version", path=path)
        )

    if version.get("klarrio") == new_value:
        return Ok(False)

    expected: StrDict = copy.deepcopy(data)
    expected_version = get_table(expected, "version")
    assert expected_version is not None
    expected_version["klarrio"] = new_value

    patched = _patch_text(text, new_value)
    if patched is None or _loads(patched) != expected:
        patched = json.dumps(expected, indent=2, ensure_ascii=False) + "\n"

    try:
        atomic_write_text(path, patched)
    except OSError as e:
        return Err(ConfigError(f"could not write {path.name}: {e}", path=path))

    return Ok(True)


def persist_local_version(
    manifest: ProjectManifest,
    *,
    repo: Repository,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[None, StepFailure]:
    """Write the manifest's local version, commit it and push to the main branch.

    Runs after the image is published, so every failure is a ``persist`` step
    failure. A file that already holds the version is pushed without a new
    commit.
    """
    path = manifest.path
    if path is None:
        return Err(StepFailure(step="persist", message="manifest has no file to write to"))

    message = commit_message(manifest)
    console.print(f"update {path.name}: version.klarrio = {manifest.local_version}", Style.DIM)
    console.print(f"git commit -m {message!r} -- {path.name}", Style.DIM)
    console.print(f"git push {repo.remote} HEAD:{manifest.main_branch}", Style.DIM)
    if dry_run:
        return Ok(None)

    written = write_local_version(manifest)
    if isinstance(written, Err):
        return Err(
            StepFailure(
                step="persist",
                message=f"failed to write {path.name}",
                hint=written.error.message,
            )
        )

    if written.value:
        committed = repo.commit_paths([path], message)
        if isinstance(committed, Err):
            return Err(
                StepFailure(
                    step="persist",
                    message=f"failed to commit {path.name}",
                    hint=committed.error.message,
                )
            )
    else:
        console.warning(
            f"{path.name} already holds version {manifest.local_version}; nothing to commit"
        )

    pushed = repo.push(manifest.main_branch)
    if isinstance(pushed, Err):
        return Err(
            StepFailure(
                step="persist",
                message=f"failed to push version update to {repo.remote}/{manifest.main_branch}",
                hint=pushed.error.message,
            )
        )

    return Ok(None)


def _patch_text(text: str, new_value: str) -> str | None:
    matches = list(_LOCAL_VERSION_RE.finditer(text))
    if len(matches) != 1:
        return None
    m = matches[0]
    return text[: m.start()] + f'{m.group(1)}"{new_value}"' + text[m.end() :]


def _loads(text: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None
