"""Snapshot and release sequencing.

A snapshot builds and/or pushes ``<repo>:<upstream>-<local>-SNAPSHOT`` and
leaves the repository alone. A release is always the full sequence:

    gate -> confirm -> build -> docker build -> docker push
         -> git tag + push -> bump local version, commit + push

Each step waits for the previous one and the first failure stops the
sequence. Nothing is rolled back: a failure after ``docker push`` leaves a
published image without a tag or version bump, which the operator has to
reconcile by hand.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from kb.core.result import Err, Ok, Result
from kb.git.repository import Repository
from kb.manifest.model import ProjectManifest
from kb.manifest.persist import persist_local_version
from kb.output.console import ConsoleProtocol, Style
from kb.release.build import BuildInputs, run_build_command
from kb.release.confirm import Confirmation
from kb.release.errors import AbortedByOperator, ReleaseError, StepFailure, UsageError
from kb.release.gate import authorize_release
from kb.release.timeouts import CONFIRM_TIMEOUT_SECONDS
from kb.version.semver import UpStep
from kb.version.target import (
    Mode,
    ProjectVersion,
    ReleaseTarget,
    compute_target,
    next_local_version,
)

__all__ = [
    "BuildRunner",
    "ConfirmFn",
    "ContainerClient",
    "ReleaseOutcome",
    "ReleaseRequest",
    "ReleaseService",
    "resolve_upstep",
]


DEFAULT_RELEASE_UPSTEP = UpStep.MINOR


class BuildRunner(Protocol):
    def __call__(
        self,
        command: str,
        inputs: BuildInputs,
        *,
        cwd: Path,
        console: ConsoleProtocol,
        dry_run: bool = False,
    ) -> Result[None, StepFailure]: ...


class ContainerClient(Protocol):
    def build_image(
        self, *, tag: str, dockerfile: str, context: Path, dry_run: bool = False
    ) -> Result[None, StepFailure]: ...

    def push_image(
        self, *, tag: str, context: Path, dry_run: bool = False
    ) -> Result[None, StepFailure]: ...


ConfirmFn = Callable[[str, float], Confirmation]


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    mode: Mode
    upstep: UpStep | None = None
    build_only: bool = False
    push_only: bool = False
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    target: ReleaseTarget
    built: bool
    pushed: bool
    tagged: bool = False
    next_version: ProjectVersion | None = None


def resolve_upstep(request: ReleaseRequest) -> Result[UpStep, UsageError]:
    """Validate the flag combination and return the effective up-step."""
    if request.build_only and request.push_only:
        return Err(
            UsageError(
                "cannot have both build-only (-b) and push-only (-p) set at the same time"
            )
        )
    if request.mode is Mode.RELEASE:
        if request.build_only or request.push_only:
            return Err(UsageError("you cannot do build-only or push-only in release mode"))
        return Ok(request.upstep or DEFAULT_RELEASE_UPSTEP)
    return Ok(UpStep.REVISION)


class ReleaseService:
    def __init__(
        self,
        *,
        manifest: ProjectManifest,
        repo: Repository,
        console: ConsoleProtocol,
        container: ContainerClient,
        confirm: ConfirmFn,
        builder: BuildRunner = run_build_command,
        confirm_timeout: float = CONFIRM_TIMEOUT_SECONDS,
        workdir: Path | None = None,
    ) -> None:
        self._manifest = manifest
        self._repo = repo
        self._console = console
        self._container = container
        self._confirm = confirm
        self._builder = builder
        self._confirm_timeout = confirm_timeout
        self._workdir = workdir or repo.path

    def plan(self, request: ReleaseRequest) -> Result[ReleaseTarget, UsageError]:
        upstep = resolve_upstep(request)
        if isinstance(upstep, Err):
            return upstep
        return Ok(compute_target(self._manifest, request.mode, upstep.value))

    def run(self, request: ReleaseRequest) -> Result[ReleaseOutcome, ReleaseError]:
        planned = self.plan(request)
        if isinstance(planned, Err):
            return planned
        target = planned.value

        if request.mode is Mode.SNAPSHOT and request.upstep not in (None, UpStep.REVISION):
            self._console.warning("--upstep is ignored in snapshot mode")

        if target.mode is Mode.SNAPSHOT:
            return self._snapshot(target, request)
        return self._release(target, dry_run=request.dry_run)

    def _snapshot(
        self, target: ReleaseTarget, request: ReleaseRequest
    ) -> Result[ReleaseOutcome, ReleaseError]:
        self._console.header(f"Snapshot {target.docker_tag}")

        built = False
        if not request.push_only:
            result = self._build(target, dry_run=request.dry_run)
            if isinstance(result, Err):
                return result
            built = True

        pushed = False
        if not request.build_only:
            result = self._push(target, dry_run=request.dry_run)
            if isinstance(result, Err):
                return result
            pushed = True

        return Ok(ReleaseOutcome(target=target, built=built, pushed=pushed))

    def _release(
        self, target: ReleaseTarget, *, dry_run: bool
    ) -> Result[ReleaseOutcome, ReleaseError]:
        manifest = self._manifest
        self._console.header(f"Release {target.version}")

        gated = authorize_release(self._repo, manifest.main_branch)
        if isinstance(gated, Err):
            return gated
        self._console.success(
            f"repository is on {manifest.main_branch}, in sync with "
            f"{self._repo.remote}/{manifest.main_branch} and clean"
        )

        next_version = next_local_version(manifest)
        if dry_run:
            self._console.print("dry run: skipping confirmation", Style.DIM)
        else:
            confirmed = self._ask(target, next_version)
            if isinstance(confirmed, Err):
                return confirmed

        steps = (
            lambda: self._build(target, dry_run=dry_run),
            lambda: self._push(target, dry_run=dry_run),
            lambda: self._tag(target, dry_run=dry_run),
        )
        for step in steps:
            result = step()
            if isinstance(result, Err):
                return result

        self._console.info(f"Advancing version to {next_version}...")
        persisted = persist_local_version(
            manifest.with_bumped_local_version(),
            repo=self._repo,
            console=self._console,
            dry_run=dry_run,
        )
        if isinstance(persisted, Err):
            self._console.warning(
                f"{target.docker_tag} is published and tagged {target.version}, "
                "but the version bump was not pushed; update the manifest by hand"
            )
            return persisted

        self._console.success(f"released {target.docker_tag}")
        return Ok(
            ReleaseOutcome(
                target=target,
                built=True,
                pushed=True,
                tagged=True,
                next_version=next_version,
            )
        )

    def _ask(
        self, target: ReleaseTarget, next_version: ProjectVersion
    ) -> Result[None, AbortedByOperator]:
        main_branch = self._manifest.main_branch
        self._console.info(f"You are about to RELEASE version {target.version} of this project.")
        self._console.info(
            f"As a result, the version number in the manifest will be incremented to "
            f"{next_version}."
        )
        self._console.info(
            f"This change will be pushed straight to {self._repo.remote}/{main_branch}."
        )

        answer = self._confirm("Are you sure?", self._confirm_timeout)
        match answer:
            case Confirmation.CONFIRMED:
                return Ok(None)
            case Confirmation.TIMED_OUT:
                return Err(AbortedByOperator("timed_out"))
            case _:
                return Err(AbortedByOperator("declined"))

    def _build(self, target: ReleaseTarget, *, dry_run: bool) -> Result[None, StepFailure]:
        manifest = self._manifest
        self._console.info("Building the component...")
        built = self._builder(
            manifest.build_command,
            BuildInputs(version=target.version_string, docker_tag=target.docker_tag),
            cwd=self._workdir,
            console=self._console,
            dry_run=dry_run,
        )
        if isinstance(built, Err):
            return built

        self._console.info("Building the docker container...")
        return self._container.build_image(
            tag=target.docker_tag,
            dockerfile=manifest.dockerfile_path,
            context=self._workdir,
            dry_run=dry_run,
        )

    def _push(self, target: ReleaseTarget, *, dry_run: bool) -> Result[None, StepFailure]:
        self._console.info(f"Pushing {target.docker_tag}...")
        return self._container.push_image(
            tag=target.docker_tag, context=self._workdir, dry_run=dry_run
        )

    def _tag(self, target: ReleaseTarget, *, dry_run: bool) -> Result[None, StepFailure]:
        name = target.version_string
        self._console.info(f"Tagging {name}...")
        self._console.print(f"git tag -a {name} -m 'Release {name}'", Style.DIM)
        self._console.print(f"git push {self._repo.remote} refs/tags/{name}", Style.DIM)
        if dry_run:
            return Ok(None)

        created = self._repo.create_annotated_tag(name, f"Release {name}")
        if isinstance(created, Err):
            return Err(self._tag_failure(target, "failed to create tag", created.error.message))

        pushed = self._repo.push_tag(name)
        if isinstance(pushed, Err):
            return Err(self._tag_failure(target, "failed to push tag", pushed.error.message))
        return Ok(None)

    def _tag_failure(self, target: ReleaseTarget, what: str, detail: str) -> StepFailure:
        self._console.warning(
            f"{target.docker_tag} was already pushed and is NOT rolled back; "
            "tag the release and bump the manifest version by hand"
        )
        return StepFailure(step="tag", message=f"{what} {target.version}", hint=detail)
