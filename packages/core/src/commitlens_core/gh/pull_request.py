"""Commit → pull request correlation.

Given a commit sha, find the pull request that introduced it and pull the
automated reviewer's "Pull Request Overview" out of that PR's reviews. Every
lookup here is best-effort: a failure degrades to "no PR" or "no overview"
and is never raised to the caller.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from commitlens_core.models import PullRequestInfo

logger = logging.getLogger(__name__)

OVERVIEW_MARKER = "Pull Request Overview"
DEFAULT_REVIEW_BOTS = ("copilot",)

# Body of the level-2 "## Pull Request Overview" section, up to the next
# level-2 heading (a line starting "##" but not "###") or the end of the review.
_OVERVIEW_SECTION_RE = re.compile(
    r"^## Pull Request Overview[^\S\n]*(?:\n|\Z)(.*?)(?=^##(?!#)|\Z)", re.DOTALL | re.MULTILINE
)


def is_overview_review(review, review_bots: Iterable[str] = DEFAULT_REVIEW_BOTS) -> bool:
    """Return True if the review was written by an automated reviewer."""
    user = review.user
    if user is not None:
        login = (user.login or "").lower()
        if any(bot.lower() in login for bot in review_bots):
            return True
        if user.type == "Bot":
            return True
    return OVERVIEW_MARKER in (review.body or "")


def find_overview_review(reviews, review_bots: Iterable[str] = DEFAULT_REVIEW_BOTS):
    """Return the first automated review, or None."""
    review_bots = tuple(review_bots)
    for review in reviews:
        if is_overview_review(review, review_bots):
            return review
    return None


def extract_overview(body: str | None) -> str | None:
    """Extract the overview section of a reviewer's body.

    Falls back to the whole body when there is no "## Pull Request Overview"
    heading. Returns None for an empty body or an empty section.
    """
    if not body or not body.strip():
        return None
    match = _OVERVIEW_SECTION_RE.search(body)
    if match is None:
        return body.strip()
    return match.group(1).strip() or None


def _pr_state(pr) -> str:
    if pr.merged or pr.merged_at is not None:
        return "merged"
    return pr.state


def get_pull_for_commit(
    repo,
    sha: str,
    review_bots: Iterable[str] = DEFAULT_REVIEW_BOTS,
) -> PullRequestInfo | None:
    """Return the pull request that introduced ``sha``, or None.

    Only the first associated PR is used, in the order GitHub returns them.
    A failed review lookup keeps the PR and leaves ``overview`` as None.
    """
    try:
        associated = next(iter(repo.get_commit(sha).get_pulls()), None)
        if associated is None:
            return None
        pr = repo.get_pull(associated.number)
    except Exception as e:
        logger.debug("No pull request resolved for %s: %s", sha[:7], e)
        return None

    overview = None
    try:
        review = find_overview_review(pr.get_reviews(), review_bots)
        if review is not None:
            overview = extract_overview(review.body)
    except Exception as e:
        logger.debug("Could not fetch reviews for PR #%d: %s", pr.number, e)

    return PullRequestInfo(
        number=pr.number,
        title=pr.title or "",
        url=pr.html_url,
        state=_pr_state(pr),
        merged_at=pr.merged_at,
        body=pr.body,
        overview=overview,
    )
