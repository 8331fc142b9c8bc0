from __future__ import annotations

import logging
from typing import Sequence

from github import Github, GithubException

from bikeshed_core.concerns import FileDiff
from bikeshed_core.errors import PlatformError

logger = logging.getLogger(__name__)


def _describe(e: GithubException) -> str:
    data = e.data if isinstance(e.data, dict) else {}
    message = data.get("message")
    return f"{e.status} {message}" if message else str(e)


class GitHubPlatform:
    """Hosting API backed by PyGithub.

    Every call is attempted once. A GithubException is re-raised as
    PlatformError so the pipeline only has to know about its own errors.
    """

    def __init__(self, token: str, client: Github | None = None):
        self._gh = client if client is not None else Github(token)
        self._repos: dict = {}

    def _repo(self, repo_name: str):
        if repo_name not in self._repos:
            self._repos[repo_name] = self._gh.get_repo(repo_name)
        return self._repos[repo_name]

    def list_changed_files(self, repo_name: str, pr_number: int) -> list[FileDiff]:
        try:
            pull = self._repo(repo_name).get_pull(pr_number)
            files = [FileDiff.from_patch(f.filename, f.patch) for f in pull.get_files()]
        except GithubException as e:
            raise PlatformError(f"Could not list files for {repo_name}#{pr_number}: {_describe(e)}") from e
        logger.debug("Fetched %d changed file(s) for %s#%d", len(files), repo_name, pr_number)
        return files

    def post_comment(self, repo_name: str, issue_number: int, body: str):
        try:
            return self._repo(repo_name).get_issue(issue_number).create_comment(body)
        except GithubException as e:
            raise PlatformError(f"Could not comment on {repo_name}#{issue_number}: {_describe(e)}") from e

    def add_labels(self, repo_name: str, issue_number: int, labels: Sequence[str]) -> None:
        try:
            self._repo(repo_name).get_issue(issue_number).add_to_labels(*labels)
        except GithubException as e:
            raise PlatformError(_describe(e)) from e
