"""Release gate: is the checkout safe to release from?

Checks run in a fixed order and the first failing one is reported:

1. the checked-out branch is the main branch,
2. the main branch is not behind its remote,
3. the main branch is not ahead of its remote,
4. no tracked file is modified or staged.

Only releases are gated; snapshots never call into this module.
"""

from __future__ import annotations

from kb.core.result import Err, Ok, Result
from kb.git.repository import DEFAULT_REMOTE, GitError, Repository, RepositoryStatus
from kb.release.errors import GateDenied, StepFailure

__all__ = ["authorize_release", "evaluate_gate"]


def _check_branch(branch: str, main_branch: str) -> GateDenied | None:
    if branch == main_branch:
        return None
    return GateDenied(
        reason="wrong_branch",
        message=f"you can only release from the repository's {main_branch} branch "
        f"(currently on {branch})",
        hint=f"git checkout {main_branch}",
    )


def _check_behind(behind: int, main_branch: str, remote: str) -> GateDenied | None:
    if behind == 0:
        return None
    return GateDenied(
        reason="behind",
        message=f"your {main_branch} branch is {behind} commit(s) behind "
        f"{remote}/{main_branch}; cannot release",
        hint="git pull --ff-only",
    )


def _check_ahead(ahead: int, main_branch: str, remote: str) -> GateDenied | None:
    if ahead == 0:
        return None
    return GateDenied(
        reason="ahead",
        message=f"your {main_branch} branch is {ahead} commit(s) ahead of "
        f"{remote}/{main_branch}; cannot release",
        hint="git push",
    )


def _check_clean(is_clean: bool) -> GateDenied | None:
    if is_clean:
        return None
    return GateDenied(
        reason="dirty",
        message="you have uncommitted changes; cannot release",
        hint="commit or stash your changes, then retry",
    )


def evaluate_gate(
    status: RepositoryStatus,
    main_branch: str,
    *,
    remote: str = DEFAULT_REMOTE,
) -> Result[RepositoryStatus, GateDenied]:
    """Apply the gate to an already-queried status."""
    for denied in (
        _check_branch(status.branch, main_branch),
        _check_behind(status.behind, main_branch, remote),
        _check_ahead(status.ahead, main_branch, remote),
        _check_clean(status.is_clean),
    ):
        if denied is not None:
            return Err(denied)
    return Ok(status)


def authorize_release(
    repo: Repository, main_branch: str
) -> Result[RepositoryStatus, GateDenied | StepFailure]:
    """Query the checkout and gate the release.

    The branch is checked before anything touches the network; the remote is
    fetched before ahead/behind are counted.
    """
    branch = repo.current_branch()
    if isinstance(branch, Err):
        return Err(_query_failed(branch.error))
    denied = _check_branch(branch.value, main_branch)
    if denied is not None:
        return Err(denied)

    sync = repo.sync_status(main_branch)
    if isinstance(sync, Err):
        return Err(_query_failed(sync.error))
    behind, ahead = sync.value

    clean = repo.is_clean()
    if isinstance(clean, Err):
        return Err(_query_failed(clean.error))

    status = RepositoryStatus(
        branch=branch.value, behind=behind, ahead=ahead, is_clean=clean.value
    )
    gated = evaluate_gate(status, main_branch, remote=repo.remote)
    if isinstance(gated, Err):
        return gated
    return Ok(status)


def _query_failed(e: GitError) -> StepFailure:
    return StepFailure(
        step="git",
        message=f"could not determine repository state (git {e.command} failed)",
        hint=e.message,
    )
