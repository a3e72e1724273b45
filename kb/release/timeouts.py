from __future__ import annotations

# Local git operations (rev-parse, status, rev-list, tag, add, commit)
GIT_TIMEOUT_SECONDS = 30.0

# Network-bound git operations (fetch, push)
GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

# How long the operator has to confirm a release
CONFIRM_TIMEOUT_SECONDS = 10.0
