"""topics command: list the discussion topics the bot can raise."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from bikeshed_core.topics import TEST_COVERAGE_TOPIC, TODO_TOPIC, TOPIC_CATALOG

console = Console()


@click.command("topics")
def topics_cmd():
    """Show every topic with its meeting length and urgency."""
    table = Table(title="Discussion topics", show_header=True, header_style="bold cyan")
    table.add_column("Topic", max_width=40)
    table.add_column("Meeting", justify="right", width=10)
    table.add_column("Urgency", width=18)
    table.add_column("Raised by", width=14)

    rows = [(topic, "any file") for topic in TOPIC_CATALOG]
    rows += [(TEST_COVERAGE_TOPIC, "test files"), (TODO_TOPIC, "TODO lines")]
    for topic, source in rows:
        table.add_row(topic.name, f"{topic.meeting_length_minutes} min", topic.urgency, source)

    console.print(table)
