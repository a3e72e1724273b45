"""Version arithmetic and release target computation."""

from .semver import FormatError, SemVer, UpStep, increment, parse
from .target import (
    Mode,
    ProjectVersion,
    ReleaseTarget,
    compute_target,
    next_local_version,
    parse_mode,
)

__all__ = [
    "FormatError",
    "Mode",
    "ProjectVersion",
    "ReleaseTarget",
    "SemVer",
    "UpStep",
    "compute_target",
    "increment",
    "next_local_version",
    "parse",
    "parse_mode",
]
