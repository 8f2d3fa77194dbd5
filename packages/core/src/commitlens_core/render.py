"""Chat message rendering for commit history results.

Output is plain text with light inline markup (``*bold*``, ``_italic_``,
``[text](url)`` links and ``:emoji:`` shortcodes). Every rendered message is
guaranteed to fit its character budget.
"""

from __future__ import annotations

from typing import Iterable

from commitlens_core.models import Commit, FileHistoryResult, HistoryResult

MAX_CHARS = 4000  # safety margin under the chat platform's hard limit
MAX_FILE_CHARS = 3000
MAX_COMMITS = 10

# Stop adding commit blocks once this many characters are used.
EARLY_STOP_MARGIN = 200

NO_DATA_MESSAGE = "*AI Summary:* Unknown\n\n_No data provided._"
NO_SUMMARY = "(no AI summary)"
EARLY_STOP_MARKER = "… (output truncated due to length)"
TRUNCATION_MARKER = "\n\n...(truncated)"


def _error_line(message: str | None) -> str:
    return f":warning: Error: {message if message else 'Unknown error'}"


def _headline(index: int, commit: Commit) -> str:
    message = commit.message.strip() if commit.message else ""
    if not message:
        message = "(no message)"
    return f"{index}. **[{commit.short_sha}]({commit.url})** - {message}"


def _byline(commit: Commit) -> str:
    author = commit.author if commit.author else "Unknown author"
    if commit.relative_time:
        return f":bust_in_silhouette: {author} • *{commit.relative_time}*"
    return f":bust_in_silhouette: {author}"


def _summary_line(commit: Commit) -> str:
    summary = commit.pr.ai_summary if commit.pr is not None else None
    if summary and summary.strip():
        return f":bulb: {summary.strip()}"
    return NO_SUMMARY


def clamp(text: str, limit: int) -> str:
    """Hard-truncate ``text`` so that it, plus the truncation marker, fits ``limit``."""
    if len(text) <= limit:
        return text
    return text[: limit - len(TRUNCATION_MARKER)].rstrip() + TRUNCATION_MARKER


def _omitted_line(total: int, shown: int) -> str | None:
    hidden = total - shown
    if hidden <= 0:
        return None
    return f"_…and {hidden} more commit{'s' if hidden != 1 else ''} not shown._"


def render_history(result: HistoryResult | None) -> str:
    """Render a repository history result as a single chat message."""
    if result is None:
        return NO_DATA_MESSAGE
    if not result.success:
        return _error_line(result.message)

    lines: list[str] = []
    if result.summary:
        lines.append(f":sparkles: *AI Summary:* {result.summary.strip()}")
        lines.append("")
    lines.append(":clipboard: Recent Commits:")

    commits = list(result.commits)
    if not commits:
        lines.append("_No commits found._")
        return clamp("\n".join(lines).strip(), MAX_CHARS)

    shown = commits[:MAX_COMMITS]
    stopped_early = False
    for i, commit in enumerate(shown, 1):
        lines.append(_headline(i, commit))
        lines.append(_byline(commit))
        lines.append(_summary_line(commit))
        lines.append("")

        if sum(len(line) + 1 for line in lines) > MAX_CHARS - EARLY_STOP_MARGIN:
            lines.append(EARLY_STOP_MARKER)
            stopped_early = True
            break

    if not stopped_early:
        omitted = _omitted_line(len(commits), len(shown))
        if omitted:
            lines.append(omitted)

    return clamp("\n".join(lines).strip(), MAX_CHARS)


def _file_blocks(commits: Iterable[Commit]) -> list[str]:
    lines = []
    for i, commit in enumerate(commits, 1):
        lines.append(_headline(i, commit))
        lines.append(_byline(commit))
        lines.append("")
    return lines


def render_file_history(result: FileHistoryResult | None) -> str:
    """Render a single file's history. Budget is MAX_FILE_CHARS, with no per-block early stop."""
    if result is None:
        return NO_DATA_MESSAGE
    if not result.success:
        return _error_line(result.error)

    header = f":page_facing_up: History for `{result.file}`"
    if result.repository:
        header += f" in *{result.repository}*"
    lines = [header, ""]

    commits = list(result.commits)
    if not commits:
        lines.append("_No commits found for this file._")
    else:
        lines.extend(_file_blocks(commits[:MAX_COMMITS]))
        omitted = _omitted_line(len(commits), MAX_COMMITS)
        if omitted:
            lines.append(omitted)

    return clamp("\n".join(lines).strip(), MAX_FILE_CHARS)
