"""GitHub token lookup for the CLI.

``load_config`` already reads GITHUB_TOKEN into ``config["github_token"]``.
When that is empty, the token of a logged-in GitHub CLI session
(``gh auth login``) is borrowed instead.
"""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)

GH_TOKEN_COMMAND = ["gh", "auth", "token"]
GH_TIMEOUT_SECONDS = 5


def resolve_github_token(config: dict) -> str | None:
    """Return the configured token, else the gh session token, else None."""
    token = config.get("github_token")
    if token:
        return token
    return _gh_session_token()


def _gh_session_token() -> str | None:
    try:
        result = subprocess.run(GH_TOKEN_COMMAND, capture_output=True, text=True, timeout=GH_TIMEOUT_SECONDS)
    except FileNotFoundError:
        logger.debug("gh CLI is not installed; no session token to borrow.")
        return None
    except subprocess.TimeoutExpired:
        logger.debug("`gh auth token` did not answer within %ss.", GH_TIMEOUT_SECONDS)
        return None

    if result.returncode != 0:
        logger.debug("`gh auth token` exited with %d: %s", result.returncode, (result.stderr or "").strip())
        return None

    token = result.stdout.strip()
    if token:
        logger.debug("Using the GitHub token of the gh CLI session.")
    return token or None
