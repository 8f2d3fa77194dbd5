"""Commit history data models.

Every value here is built by the history fetcher for a single command
invocation and consumed by the renderer. Nothing is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PullRequestInfo:
    """The pull request a commit was merged through.

    Each Commit owns its own instance. Two commits from the same PR carry two
    independently fetched (and independently summarized) copies.
    """

    number: int
    title: str
    url: str
    state: str  # "open" | "closed" | "merged"
    merged_at: datetime | None = None
    body: str | None = None
    overview: str | None = None  # automated reviewer's "Pull Request Overview"
    ai_summary: str | None = None


@dataclass(frozen=True)
class Commit:
    sha: str
    message: str  # first line only
    author: str
    email: str
    date: datetime | None
    url: str
    relative_time: str
    pr: PullRequestInfo | None = None

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True)
class HistoryResult:
    """Outcome of fetching a repository's recent commits.

    A failed result never carries commits. A successful result never carries a
    message, but may legitimately have zero commits.
    """

    success: bool
    commits: tuple[Commit, ...] = ()
    summary: str | None = None
    message: str | None = None

    @classmethod
    def failure(cls, message: str) -> HistoryResult:
        return cls(success=False, message=message)


@dataclass(frozen=True)
class FileHistoryResult:
    """Outcome of fetching the recent commits that touched a single file."""

    success: bool
    file: str
    repository: str | None = None
    commits: tuple[Commit, ...] = field(default_factory=tuple)
    error: str | None = None

    @classmethod
    def failure(cls, file: str, error: str, repository: str | None = None) -> FileHistoryResult:
        return cls(success=False, file=file, repository=repository, error=error)
