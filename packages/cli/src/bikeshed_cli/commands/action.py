"""action command: the GitHub Actions entry point."""

from __future__ import annotations

import logging

import click

from bikeshed_core.bot import is_pull_request_event, run_bot
from bikeshed_core.config import INPUT_NAMES, BotConfig, load_config
from bikeshed_core.errors import BikeshedError, ConfigError
from bikeshed_core.gcal.client import GoogleCalendarClient
from bikeshed_core.gh.actions import load_context, read_inputs, set_failed, set_output
from bikeshed_core.gh.pull_request import GitHubPlatform

logger = logging.getLogger(__name__)


@click.command("action")
@click.pass_context
def action_cmd(ctx):
    """Run the bot for the pull request that triggered this workflow.

    \b
    Reads the event from GITHUB_EVENT_NAME / GITHUB_EVENT_PATH, inputs from
    INPUT_* variables, and writes `concerns-found` and `meetings-scheduled`
    to GITHUB_OUTPUT. Any event other than a pull request is a no-op.
    """
    context = load_context()
    if not is_pull_request_event(context.event_name):
        logger.info("This action only runs on pull request events")
        return

    config_path = ctx.obj.get("config_path", ".bikeshed.yml") if ctx.obj else ".bikeshed.yml"
    try:
        config = BotConfig.from_dict(load_config(config_path, inputs=read_inputs(INPUT_NAMES)))
        if context.pr_number is None:
            raise ConfigError("The event payload does not contain a pull request number.")

        platform = GitHubPlatform(config.github_token)
        calendar = (
            GoogleCalendarClient(config.google_calendar_credentials, config.google_calendar_id)
            if config.enable_calendar
            else None
        )
        summary = run_bot(context.repository, context.pr_number, config, platform, calendar)
    except BikeshedError as e:
        set_failed(f"Action failed: {e}")
        ctx.exit(1)

    for name, value in summary.outputs().items():
        set_output(name, value)
