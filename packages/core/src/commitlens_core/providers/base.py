"""Base summarizer implementing the Template Method pattern.

All providers share the same two summarization algorithms:
    summarize_pr()       → _build_pr_prompt()       ┐
    summarize_activity() → _build_activity_prompt() ┴→ _call_safely() → _call_api()

Subclasses implement two things only:
  - __init__: validate and store the async SDK client
  - _call_api: make one raw completion call and return the text response

Summaries are enrichment, not the deliverable: a failed call is logged and
becomes None. Calls are never retried.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from commitlens_core.models import Commit

logger = logging.getLogger(__name__)

_PR_SYSTEM_PROMPT = (
    "You are a code review assistant. Summarize pull request changes in 1-2 concise sentences. "
    "Focus on WHAT changed and WHY."
)
_ACTIVITY_SYSTEM_PROMPT = (
    "You are a repository activity summarizer. Analyze recent commits and provide a brief 2-3 sentence "
    "overview of the recent development activity. Focus on themes, patterns, and overall direction."
)


def build_activity_digest(commits: Sequence[Commit]) -> str:
    """Number each commit message, suffixed with its PR when it has one."""
    lines = []
    for i, commit in enumerate(commits, 1):
        line = f"{i}. {commit.message}"
        if commit.pr is not None:
            line += f" (PR #{commit.pr.number}: {commit.pr.title})"
        lines.append(line)
    return "\n".join(lines)


class BaseSummarizer(ABC):
    MODEL: str = ""

    PR_MAX_TOKENS = 100
    PR_TEMPERATURE = 0.3
    ACTIVITY_MAX_TOKENS = 150
    ACTIVITY_TEMPERATURE = 0.4

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    async def summarize_pr(self, overview: str | None, title: str) -> str | None:
        """Summarize one PR's reviewer overview, or None without calling the model."""
        if not overview or not overview.strip():
            return None
        return await self._call_safely(
            _PR_SYSTEM_PROMPT,
            self._build_pr_prompt(overview, title),
            self.PR_MAX_TOKENS,
            self.PR_TEMPERATURE,
        )

    async def summarize_activity(self, commits: Sequence[Commit]) -> str | None:
        """Summarize the themes across a batch of commits, or None for an empty batch."""
        if not commits:
            return None
        return await self._call_safely(
            _ACTIVITY_SYSTEM_PROMPT,
            self._build_activity_prompt(commits),
            self.ACTIVITY_MAX_TOKENS,
            self.ACTIVITY_TEMPERATURE,
        )

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    async def _call_api(self, system_prompt: str, user_prompt: str, max_tokens: int, temperature: float) -> str:
        """Make a single completion call and return the raw text response.

        It should raise on failure — _call_safely handles logging.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    async def _call_safely(
        self, system_prompt: str, user_prompt: str, max_tokens: int, temperature: float
    ) -> str | None:
        try:
            text = await self._call_api(system_prompt, user_prompt, max_tokens, temperature)
        except Exception as e:
            logger.warning("%s summarization failed: %s", self.__class__.__name__, e)
            return None
        if text is None:
            return None
        return text.strip() or None

    def _build_pr_prompt(self, overview: str, title: str) -> str:
        return f"PR Title: {title}\n\nReviewer Overview:\n{overview}\n\nProvide a brief 1-2 sentence summary."

    def _build_activity_prompt(self, commits: Sequence[Commit]) -> str:
        digest = build_activity_digest(commits)
        return f"Recent commits:\n\n{digest}\n\nProvide a 2-3 sentence summary of recent repository activity."
