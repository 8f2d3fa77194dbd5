"""Commit history fetching and enrichment.

The repository pipeline for one invocation:
    list commits (one GitHub call, errors mapped to fixed messages)
      → per commit, concurrently: correlate PR → summarize its overview
      → once every commit is done: summarize the whole batch
      → HistoryResult

Blocking PyGithub calls run in worker threads via asyncio.to_thread so the
per-commit tasks interleave on one event loop. Nothing here raises to the
caller: every failure path returns a failed result.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Iterable

from github import GithubException

from commitlens_core.gh.commits import MAX_PAGE_SIZE, get_repo, list_commits, set_page_size
from commitlens_core.gh.pull_request import DEFAULT_REVIEW_BOTS, get_pull_for_commit
from commitlens_core.models import Commit, FileHistoryResult, HistoryResult
from commitlens_core.providers.anthropic import AnthropicSummarizer
from commitlens_core.providers.base import BaseSummarizer
from commitlens_core.providers.openai import OpenAISummarizer
from commitlens_core.utils.relative_time import format_relative_time

logger = logging.getLogger(__name__)

INVALID_REPOSITORY = 'Invalid repository format. Expected "owner/repo"'
INVALID_BRANCH = "Branch name is required"
INVALID_COUNT = "Commit count must be a positive integer"
INVALID_FILE_PATH = "Invalid file path. Please provide a valid file path."

_REPO_ERRORS = {
    404: "Repository not found",
    403: "Rate limit exceeded or access forbidden",
    401: "Invalid GitHub token or authentication failed",
}


def get_summarizer(config: dict) -> BaseSummarizer:
    model = config["model"]
    if model == "openai":
        return OpenAISummarizer(api_key=config["openai_api_key"])
    if model == "anthropic":
        return AnthropicSummarizer(api_key=config["anthropic_api_key"])
    raise ValueError(f"Unknown model provider: {model!r}. Choose 'openai' or 'anthropic'.")


def parse_repository(identifier: str | None, default_owner: str | None = None) -> str:
    """Return ``owner/name`` for ``identifier``.

    A bare name is prefixed with ``default_owner`` when one is configured.
    Raises ValueError with a caller-facing message otherwise.
    """
    if not identifier or not isinstance(identifier, str):
        raise ValueError(INVALID_REPOSITORY)
    parts = identifier.strip().split("/")
    if len(parts) == 1 and default_owner:
        parts = [default_owner, parts[0]]
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise ValueError(INVALID_REPOSITORY)
    return "/".join(p.strip() for p in parts)


def _validate_window(branch: str | None, count) -> int:
    if not branch or not branch.strip():
        raise ValueError(INVALID_BRANCH)
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValueError(INVALID_COUNT)
    return min(count, MAX_PAGE_SIZE)


def _describe_repo_error(error: Exception) -> str:
    if isinstance(error, GithubException) and error.status in _REPO_ERRORS:
        return _REPO_ERRORS[error.status]
    return f"GitHub API error: {error}"


def _describe_file_error(error: Exception, repo_name: str, path: str) -> str:
    status = error.status if isinstance(error, GithubException) else None
    if status == 404:
        return (
            f'Repository "{repo_name}" or file "{path}" not found. '
            "Please check the repository name and file path."
        )
    if status == 403:
        return "GitHub API rate limit exceeded or insufficient permissions. Please check your token."
    if status == 401:
        return "Authentication failed. Please check your GitHub token."
    return f"Failed to fetch file history: {error}"


def to_commit(raw, pr=None) -> Commit:
    """Build a Commit from a PyGithub commit object."""
    git_commit = raw.commit
    author = git_commit.author
    message = git_commit.message or ""
    date = author.date if author is not None else None
    return Commit(
        sha=raw.sha,
        message=message.split("\n", 1)[0],
        author=author.name if author is not None and author.name else "",
        email=author.email if author is not None and author.email else "",
        date=date,
        url=raw.html_url,
        relative_time=format_relative_time(date) if date is not None else "",
        pr=pr,
    )


class HistoryFetcher:
    """Fetches and enriches commit history.

    The GitHub client and summarizer are created once per process and
    injected here. ``summarizer=None`` disables every AI summary.
    """

    def __init__(
        self,
        github,
        summarizer: BaseSummarizer | None = None,
        default_owner: str | None = None,
        review_bots: Iterable[str] = DEFAULT_REVIEW_BOTS,
    ):
        self.github = github
        self.summarizer = summarizer
        self.default_owner = default_owner
        if isinstance(review_bots, str):
            review_bots = [review_bots]
        self.review_bots = tuple(review_bots)

    async def fetch_repository_history(self, repository: str, branch: str, count: int) -> HistoryResult:
        """Return the newest ``count`` commits of ``branch``, each enriched with its PR."""
        try:
            repo_name = parse_repository(repository, self.default_owner)
            count = _validate_window(branch, count)
        except ValueError as e:
            return HistoryResult.failure(str(e))

        try:
            repo, raw_commits = await asyncio.to_thread(self._list, repo_name, branch, count)
        except Exception as e:
            logger.warning("Could not list commits for %s@%s: %s", repo_name, branch, e)
            return HistoryResult.failure(_describe_repo_error(e))

        logger.debug("Enriching %d commit(s) from %s@%s", len(raw_commits), repo_name, branch)
        commits = await asyncio.gather(*(self._enrich(repo, raw) for raw in raw_commits))

        summary = None
        if self.summarizer is not None:
            summary = await self.summarizer.summarize_activity(commits)

        return HistoryResult(success=True, commits=tuple(commits), summary=summary)

    async def fetch_file_history(self, repository: str, path: str, branch: str, count: int) -> FileHistoryResult:
        """Return the newest ``count`` commits on ``branch`` that touched ``path``."""
        if not path or not isinstance(path, str) or not path.strip():
            return FileHistoryResult.failure(path or "", INVALID_FILE_PATH, repository)
        try:
            repo_name = parse_repository(repository, self.default_owner)
            count = _validate_window(branch, count)
        except ValueError as e:
            return FileHistoryResult.failure(path, str(e), repository)

        try:
            _, raw_commits = await asyncio.to_thread(self._list, repo_name, branch, count, path)
        except Exception as e:
            logger.warning("Could not list commits for %s in %s@%s: %s", path, repo_name, branch, e)
            return FileHistoryResult.failure(path, _describe_file_error(e, repo_name, path), repo_name)

        return FileHistoryResult(
            success=True,
            file=path,
            repository=repo_name,
            commits=tuple(to_commit(raw) for raw in raw_commits),
        )

    def _list(self, repo_name: str, branch: str, count: int, path: str | None = None):
        set_page_size(self.github, count)
        repo = get_repo(self.github, repo_name)
        return repo, list_commits(repo, branch, count, path=path)

    async def _enrich(self, repo, raw) -> Commit:
        pr = await asyncio.to_thread(get_pull_for_commit, repo, raw.sha, self.review_bots)
        if pr is not None and pr.overview and self.summarizer is not None:
            pr = replace(pr, ai_summary=await self.summarizer.summarize_pr(pr.overview, pr.title))
        return to_commit(raw, pr)
