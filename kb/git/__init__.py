"""Git access for the project checkout."""

from kb.git.repository import DEFAULT_REMOTE, GitError, Repository, RepositoryStatus

__all__ = ["DEFAULT_REMOTE", "GitError", "Repository", "RepositoryStatus"]
