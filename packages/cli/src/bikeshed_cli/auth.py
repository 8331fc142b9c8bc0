"""GitHub CLI session as a token source for `bikeshed run`.

load_config already takes the token from the config file or GITHUB_TOKEN.
When neither is set, a developer who ran `gh auth login` can still run the
bot: the token is borrowed from that session.
"""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)

GH_TOKEN_COMMAND = ("gh", "auth", "token")


def gh_cli_token(timeout: float = 5) -> str | None:
    """Return the token of the active `gh` session, or None."""
    try:
        output = subprocess.check_output(GH_TOKEN_COMMAND, text=True, timeout=timeout, stderr=subprocess.DEVNULL)
    except FileNotFoundError:
        logger.debug("gh CLI is not installed")
        return None
    except subprocess.CalledProcessError as e:
        logger.debug("gh auth token exited with status %s", e.returncode)
        return None
    except subprocess.TimeoutExpired:
        logger.debug("gh auth token timed out after %ss", timeout)
        return None
    return output.strip() or None


def fill_github_token(raw_config: dict) -> dict:
    """Fall back to the gh session when the merged config carries no token."""
    if not raw_config.get("github-token"):
        token = gh_cli_token()
        if token:
            logger.debug("Using GitHub token from gh CLI session")
        raw_config["github-token"] = token
    return raw_config
