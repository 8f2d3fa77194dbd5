"""file command — digest of the recent commits that touched one file."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console

from commitlens_cli.commands.common import build_fetcher
from commitlens_core.render import render_file_history

console = Console()


@click.command("file")
@click.option("--repo", "repository", required=True, help="GitHub repository (owner/name, or name with default_owner).")
@click.option("--path", "file_path", required=True, help="Path of the file inside the repository.")
@click.option("--branch", default=None, help="Branch to read. Defaults to default_branch from the config.")
@click.option("--count", type=int, default=None, help="Number of commits. Defaults to file_commit_count from the config.")
@click.pass_context
def file_cmd(ctx, repository: str, file_path: str, branch: str | None, count: int | None):
    """Show the latest commits that touched a file."""
    config = ctx.obj["config"]

    fetcher = build_fetcher(config, with_ai=False)
    result = asyncio.run(
        fetcher.fetch_file_history(
            repository,
            file_path,
            branch or config["default_branch"],
            count if count is not None else config["file_commit_count"],
        )
    )

    console.print(render_file_history(result), markup=False, emoji=False, highlight=False, soft_wrap=True)
    if not result.success:
        ctx.exit(1)
