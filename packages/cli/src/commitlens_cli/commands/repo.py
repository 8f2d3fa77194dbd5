"""repo command — digest of a branch's recent commits."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console

from commitlens_cli.commands.common import build_fetcher
from commitlens_core.render import render_history

console = Console()


@click.command("repo")
@click.option("--repo", "repository", required=True, help="GitHub repository (owner/name, or name with default_owner).")
@click.option("--branch", default=None, help="Branch to read. Defaults to default_branch from the config.")
@click.option("--count", type=int, default=None, help="Number of commits. Defaults to commit_count from the config.")
@click.option(
    "--model",
    type=click.Choice(["openai", "anthropic"]),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option("--no-ai", "no_ai", is_flag=True, help="Skip PR and activity summaries.")
@click.pass_context
def repo_cmd(ctx, repository: str, branch: str | None, count: int | None, model: str | None, no_ai: bool):
    """Show the latest commits of a branch with their PRs and AI summaries.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub personal access token (or use gh CLI)
      OPENAI_API_KEY       Required when using --model openai
      ANTHROPIC_API_KEY    Required when using --model anthropic
    """
    config = dict(ctx.obj["config"])
    if model is not None:
        config["model"] = model

    fetcher = build_fetcher(config, with_ai=not no_ai)
    result = asyncio.run(
        fetcher.fetch_repository_history(
            repository,
            branch or config["default_branch"],
            count if count is not None else config["commit_count"],
        )
    )

    console.print(render_history(result), markup=False, emoji=False, highlight=False, soft_wrap=True)
    if not result.success:
        ctx.exit(1)
