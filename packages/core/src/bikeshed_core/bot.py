"""Core pipeline: changed files → concerns → comments, meetings, labels."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, Sequence

from rich.console import Console

from bikeshed_core.concerns import Concern, FileDiff, MeetingProposal, generate_concerns
from bikeshed_core.errors import CalendarError, PlatformError
from bikeshed_core.labels import labels_for
from bikeshed_core.randomness import RandomSource
from bikeshed_core.scheduling import build_event, find_slot, meeting_attendees
from bikeshed_core.templates import format_meeting_time, render_concern, render_overview

if TYPE_CHECKING:
    from bikeshed_core.config import BotConfig
    from bikeshed_core.gcal.client import InsertedEvent

console = Console()
logger = logging.getLogger(__name__)

PULL_REQUEST_EVENTS = frozenset({"pull_request", "pull_request_target"})

_severity_color = {
    "CRITICAL": "red",
    "HIGH": "yellow",
    "MEDIUM": "blue",
    "DISCUSSION_NEEDED": "magenta",
    "FOLLOW_UP_NEEDED": "magenta",
}


class Platform(Protocol):
    def list_changed_files(self, repo_name: str, pr_number: int) -> list[FileDiff]: ...

    def post_comment(self, repo_name: str, issue_number: int, body: str): ...

    def add_labels(self, repo_name: str, issue_number: int, labels: Sequence[str]) -> None: ...


class Calendar(Protocol):
    def insert_event(self, event: dict) -> InsertedEvent: ...


@dataclass
class RunSummary:
    """Result returned by run_bot; the action command turns it into step outputs."""

    repo: str
    pr_number: int
    concerns: list[Concern] = field(default_factory=list)
    meetings_scheduled: int = 0
    comments_posted: int = 0
    meetings_booked: int = 0
    labels_applied: int = 0
    shadow: bool = False

    @property
    def concerns_found(self) -> int:
        return len(self.concerns)

    def outputs(self) -> dict[str, int]:
        return {"concerns-found": self.concerns_found, "meetings-scheduled": self.meetings_scheduled}


def is_pull_request_event(event_name: str) -> bool:
    return event_name in PULL_REQUEST_EVENTS


def schedule_meeting(
    concern: Concern,
    config: BotConfig,
    calendar: Calendar,
    rng: RandomSource,
    now: datetime,
) -> MeetingProposal | None:
    """Book a discussion meeting for one concern.

    Returns None when the calendar rejects the request; the failure is logged
    and the concern goes ahead without a meeting.
    """
    start = find_slot(now, config.preferred_meeting_hours, rng)
    attendees = meeting_attendees(config.pr_author_email, config.reviewer_emails)
    proposal, event = build_event(concern, start, attendees, rng)
    try:
        inserted = calendar.insert_event(event)
    except CalendarError as e:
        logger.warning("Calendar scheduling failed: %s", e)
        return None
    return replace(proposal, start_time=inserted.confirmed_start or start, link=inserted.link)


def apply_labels(platform: Platform, repo: str, pr_number: int, concern: Concern) -> bool:
    """Add the concern's labels to the PR. Returns False (and logs) on failure."""
    try:
        platform.add_labels(repo, pr_number, labels_for(concern))
    except PlatformError as e:
        logger.warning("Could not add labels: %s", e)
        return False
    return True


def print_shadow_comments(overview: str, concerns: Sequence[Concern], bodies: Sequence[str]) -> None:
    """Print what would be posted without touching GitHub."""
    console.print(f"\n[bold]Shadow run: {len(bodies) + 1} comment(s) (not posted)[/bold]\n")
    console.print(overview, markup=False)
    console.print()
    for concern, body in zip(concerns, bodies):
        color = _severity_color.get(concern.severity, "white")
        location = f"line {concern.line}" if concern.line else "general"
        console.print(
            f"[bold cyan]{concern.file}[/bold cyan]  {location}  "
            f"[{color}]{concern.severity}[/{color}]  [dim]{concern.topic.name}[/dim]"
        )
        console.print(f"  {body}", markup=False)
        console.print()


def run_bot(
    repo: str,
    pr_number: int,
    config: BotConfig,
    platform: Platform,
    calendar: Calendar | None = None,
    rng: RandomSource | None = None,
    now: datetime | None = None,
    shadow: bool = False,
) -> RunSummary:
    """Run the whole pipeline for one pull request.

    Calls to the platform and calendar happen one at a time, in concern
    order. A PlatformError from listing files or posting a comment propagates
    and stops the run; comments already posted stay posted. Calendar and
    label failures are logged and skipped.
    """
    rng = rng if rng is not None else RandomSource()
    tz = config.tzinfo
    now = now.astimezone(tz) if now is not None else datetime.now(tz)
    book_meetings = config.enable_calendar and calendar is not None and not shadow

    files = platform.list_changed_files(repo, pr_number)
    console.print(f"Inspecting {len(files)} changed file(s) in {repo}#{pr_number}")

    concerns = generate_concerns(files, config, rng)
    summary = RunSummary(
        repo=repo,
        pr_number=pr_number,
        concerns=concerns,
        meetings_scheduled=min(len(concerns), config.max_meetings_per_pr),
        shadow=shadow,
    )
    console.print(f"[cyan]{len(concerns)} concern(s) raised.[/cyan]")

    overview = render_overview(concerns, config.bot_name, config.use_emojis, config.enable_calendar)

    if shadow:
        bodies = [render_concern(c, config.comment_style, rng, config.use_emojis) for c in concerns]
        print_shadow_comments(overview, concerns, bodies)
        return summary

    platform.post_comment(repo, pr_number, overview)
    summary.comments_posted += 1

    for i, concern in enumerate(concerns, 1):
        if book_meetings:
            concern.meeting = schedule_meeting(concern, config, calendar, rng, now)
            if concern.meeting is not None:
                summary.meetings_booked += 1
                console.print(
                    f"  Meeting booked for {format_meeting_time(concern.meeting.start_time)} "
                    f"({concern.meeting.duration_minutes} min)"
                )

        body = render_concern(concern, config.comment_style, rng, config.use_emojis)
        platform.post_comment(repo, pr_number, body)
        summary.comments_posted += 1
        console.print(f"  [[{i}/{len(concerns)}]] Commented: {concern.topic.name} in {concern.file}")

        if config.add_labels and apply_labels(platform, repo, pr_number, concern):
            summary.labels_applied += 1

    console.print(
        f"\n[green]Posted {summary.comments_posted} comment(s); "
        f"{summary.meetings_booked} meeting(s) booked.[/green]"
    )
    return summary
