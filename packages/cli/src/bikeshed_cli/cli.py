"""CLI entry point for bikeshed.

Commands:
  action   run inside a GitHub Actions job (reads inputs and event payload)
  run      run against a pull request from a developer machine
  topics   list the discussion topics the bot can raise
"""

from __future__ import annotations

import importlib.metadata

import click

from bikeshed_cli.commands.action import action_cmd
from bikeshed_cli.commands.run import run_cmd
from bikeshed_cli.commands.topics import topics_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("bikeshed-bot"),
    prog_name="bikeshed",
)
@click.option(
    "--config",
    "config_path",
    default=".bikeshed.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="BIKESHED_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Turn pull requests into discussion points, comments and meetings."""
    from bikeshed_cli.logs import configure_logging

    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(action_cmd)
main.add_command(run_cmd)
main.add_command(topics_cmd)
