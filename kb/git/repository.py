"""Git operations on the project checkout.

Every query and mutation the release sequence needs from git goes through
``Repository``. Methods return Result types; nothing here decides whether a
release may proceed (see ``kb.release.gate``).

Usage:
    repo = Repository(Path.cwd())
    match repo.sync_status("master"):
        case Ok((behind, ahead)):
            print(f"{behind} behind, {ahead} ahead")
        case Err(e):
            print(f"git {e.command} failed: {e.message}")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from kb.core.result import Err, Ok, Result
from kb.platform.process import ProcessError
from kb.platform.process import run as run_process
from kb.release.timeouts import GIT_NETWORK_TIMEOUT_SECONDS, GIT_TIMEOUT_SECONDS

__all__ = ["DEFAULT_REMOTE", "GitError", "Repository", "RepositoryStatus"]


DEFAULT_REMOTE = "origin"

_NETWORK_COMMANDS = frozenset({"fetch", "pull", "push"})


@dataclass(frozen=True, slots=True)
class GitError:
    """A git command that failed.

    Attributes:
        command: The git subcommand, e.g. "rev-list" or "push".
        message: stderr of the command, or a generic description.
        returncode: Process exit code (-1 if git could not be started).
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class RepositoryStatus:
    """Snapshot of the checkout taken right before a release.

    Attributes:
        branch: Checked-out branch ("HEAD" when detached).
        behind: Commits on the remote branch missing locally.
        ahead: Local commits not on the remote branch.
        is_clean: No modified or staged tracked files (untracked are ignored).
    """

    branch: str
    behind: int
    ahead: int
    is_clean: bool


class Repository:
    def __init__(self, path: Path, *, remote: str = DEFAULT_REMOTE) -> None:
        self.path = path
        self.remote = remote

    def current_branch(self) -> Result[str, GitError]:
        """Name of the checked-out branch, "HEAD" on a detached head."""
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        if isinstance(result, Err):
            return Err(_git_error("rev-parse", result.error))
        return Ok(result.value.strip())

    def fetch(self) -> Result[None, GitError]:
        result = self._run(["fetch", self.remote])
        if isinstance(result, Err):
            return Err(_git_error("fetch", result.error))
        return Ok(None)

    def sync_status(self, branch: str) -> Result[tuple[int, int], GitError]:
        """Fetch, then count (behind, ahead) of ``branch`` vs its remote.

        Uses ``git rev-list --left-right --count <remote>/<branch>...<branch>``:
        the left count is commits only on the remote, the right count commits
        only local.
        """
        fetched = self.fetch()
        if isinstance(fetched, Err):
            return fetched

        revspec = f"{self.remote}/{branch}...{branch}"
        result = self._run(["rev-list", "--left-right", "--count", revspec])
        if isinstance(result, Err):
            return Err(_git_error("rev-list", result.error))

        parts = result.value.split()
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            return Err(
                GitError(
                    command="rev-list",
                    message=f"unexpected rev-list output: {result.value.strip()!r}",
                )
            )
        return Ok((int(parts[0]), int(parts[1])))

    def is_clean(self) -> Result[bool, GitError]:
        """True if no tracked file is modified or staged."""
        result = self._run(["status", "--porcelain"])
        if isinstance(result, Err):
            return Err(_git_error("status", result.error))
        tracked = [ln for ln in result.value.splitlines() if ln.strip() and not ln.startswith("??")]
        return Ok(not tracked)

    def create_annotated_tag(self, name: str, message: str) -> Result[None, GitError]:
        result = self._run(["tag", "-a", name, "-m", message])
        if isinstance(result, Err):
            return Err(_git_error("tag", result.error))
        return Ok(None)

    def push_tag(self, name: str) -> Result[None, GitError]:
        result = self._run(["push", self.remote, f"refs/tags/{name}"])
        if isinstance(result, Err):
            return Err(_git_error("push", result.error))
        return Ok(None)

    def commit_paths(self, paths: Sequence[Path], message: str) -> Result[None, GitError]:
        """Stage exactly ``paths`` and commit them with ``message``."""
        rels = [str(p.relative_to(self.path)) if p.is_absolute() else str(p) for p in paths]
        add = self._run(["add", "--", *rels])
        if isinstance(add, Err):
            return Err(_git_error("add", add.error))

        commit = self._run(["commit", "-m", message, "--", *rels])
        if isinstance(commit, Err):
            return Err(_git_error("commit", commit.error))
        return Ok(None)

    def push(self, branch: str) -> Result[None, GitError]:
        result = self._run(["push", self.remote, f"HEAD:refs/heads/{branch}"])
        if isinstance(result, Err):
            return Err(_git_error("push", result.error))
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        command = args[0] if args else ""
        timeout = (
            GIT_NETWORK_TIMEOUT_SECONDS if command in _NETWORK_COMMANDS else GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _git_error(command: str, e: ProcessError) -> GitError:
    return GitError(
        command=command,
        message=e.stderr.strip() or e.stdout.strip() or f"git {command} failed",
        returncode=e.returncode,
    )
