"""CLI entry point for commitlens.

Commands:
  repo  — digest of a branch's recent commits, with PRs and AI summaries
  file  — digest of the recent commits that touched one file
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from commitlens_cli.commands.file import file_cmd
from commitlens_cli.commands.repo import repo_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("commitlens"),
    prog_name="commitlens",
)
@click.option(
    "--config",
    "config_path",
    default=".commitlens.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="COMMITLENS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Chat-ready digests of recent GitHub commit activity."""
    from commitlens_core.config import load_config
    from commitlens_cli.auth import resolve_github_token

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve once so every subcommand sees the same token.
    config["github_token"] = resolve_github_token(config)

    ctx.obj["config"] = config


main.add_command(repo_cmd)
main.add_command(file_cmd)
