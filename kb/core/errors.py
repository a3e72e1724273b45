"""Process exit codes.

Each release error kind maps to one of these codes (see
``kb.output.errors``). The numeric values are part of the CLI contract and
should remain stable:

- 0: Success
- 1: User error (bad arguments, declined or timed-out confirmation)
- 2: Environment error (git/docker missing, manifest file absent)
- 3: Config error (invalid manifest or version string)
- 4: Gate denied (repository not safe to release from)
- 5: Step failed (build, docker, tag or version push failed)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    CONFIG_ERROR = 3
    GATE_DENIED = 4
    STEP_FAILED = 5
