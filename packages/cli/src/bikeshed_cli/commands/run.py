"""run command: run the bot against a pull request from a terminal."""

from __future__ import annotations

import click
from rich.console import Console

from bikeshed_core.bot import run_bot
from bikeshed_core.config import BotConfig, load_config
from bikeshed_core.errors import ConfigError, PlatformError
from bikeshed_core.gcal.client import GoogleCalendarClient
from bikeshed_core.gh.pull_request import GitHubPlatform
from bikeshed_core.randomness import RandomSource
from bikeshed_core.templates import COMMENT_STYLES

console = Console()


@click.command("run")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option(
    "--style",
    type=click.Choice(COMMENT_STYLES),
    default=None,
    help="Comment style. Overrides config file.",
)
@click.option("--max-meetings", type=int, default=None, help="Maximum concerns per PR. Overrides config file.")
@click.option("--min-concerns", type=int, default=None, help="Minimum concerns per PR. Overrides config file.")
@click.option("--seed", type=int, default=None, help="Seed the random source to make a run reproducible.")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt.")
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print the comments without posting, labelling or booking meetings.",
)
@click.pass_context
def run_cmd(
    ctx,
    repo: str,
    pr_number: int,
    style: str | None,
    max_meetings: int | None,
    min_concerns: int | None,
    seed: int | None,
    yes: bool,
    shadow: bool,
):
    """Raise discussion points on a pull request.

    \b
    The GitHub token comes from, in order:
      github-token in the config file, GITHUB_TOKEN, then `gh auth token`
    """
    from bikeshed_cli.auth import fill_github_token

    config_path = ctx.obj.get("config_path", ".bikeshed.yml") if ctx.obj else ".bikeshed.yml"
    overrides = {
        "comment-style": style,
        "max-meetings-per-pr": max_meetings,
        "min-concerns": min_concerns,
    }
    try:
        raw = fill_github_token(load_config(config_path, overrides=overrides))
        if not raw["github-token"]:
            raise click.UsageError(
                "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
                "Create a token at https://github.com/settings/tokens"
            )
        config = BotConfig.from_dict(raw)
    except ConfigError as e:
        raise click.UsageError(str(e))

    if not shadow and not yes:
        click.confirm(f"Post review comments on {repo}#{pr_number}?", abort=True)

    calendar = None
    if config.enable_calendar and not shadow:
        calendar = GoogleCalendarClient(config.google_calendar_credentials, config.google_calendar_id)

    try:
        summary = run_bot(
            repo,
            pr_number,
            config,
            GitHubPlatform(config.github_token),
            calendar=calendar,
            rng=RandomSource(seed),
            shadow=shadow,
        )
    except PlatformError as e:
        raise click.ClickException(str(e))

    for name, value in summary.outputs().items():
        console.print(f"[dim]{name}[/dim] = {value}")
