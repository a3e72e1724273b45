"""Project manifest: loading, version bumps and persistence."""

from kb.manifest.model import (
    DEFAULT_DOCKERFILE,
    DEFAULT_MAIN_BRANCH,
    MANIFEST_FILENAME,
    ProjectManifest,
    load_manifest,
    manifest_from_dict,
)
from kb.manifest.persist import commit_message, persist_local_version, write_local_version

__all__ = [
    "DEFAULT_DOCKERFILE",
    "DEFAULT_MAIN_BRANCH",
    "MANIFEST_FILENAME",
    "ProjectManifest",
    "commit_message",
    "load_manifest",
    "manifest_from_dict",
    "persist_local_version",
    "write_local_version",
]
