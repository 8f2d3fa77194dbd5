"""Helpers shared by the repo and file commands."""

from __future__ import annotations

import click

from commitlens_core.gh.commits import get_client
from commitlens_core.history import HistoryFetcher, get_summarizer


def build_fetcher(config: dict, with_ai: bool) -> HistoryFetcher:
    """Create the process-wide GitHub client and summarizer and wire them into a fetcher."""
    token = config.get("github_token")
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )

    summarizer = None
    if with_ai:
        if config["model"] == "openai" and not config.get("openai_api_key"):
            raise click.UsageError("OPENAI_API_KEY environment variable is not set. Use --no-ai to skip summaries.")
        if config["model"] == "anthropic" and not config.get("anthropic_api_key"):
            raise click.UsageError("ANTHROPIC_API_KEY environment variable is not set. Use --no-ai to skip summaries.")
        try:
            summarizer = get_summarizer(config)
        except (ImportError, ValueError) as e:
            raise click.UsageError(str(e))

    return HistoryFetcher(
        get_client(token),
        summarizer=summarizer,
        default_owner=config.get("default_owner"),
        review_bots=config.get("review_bots") or (),
    )
