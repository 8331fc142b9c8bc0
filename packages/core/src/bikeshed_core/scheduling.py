"""Meeting slot selection and calendar event payloads.

A slot is the next weekday after ``now`` at one of the preferred hours.
Existing calendar events are not consulted, so two concerns may land on the
same slot.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Iterable, Sequence

from bikeshed_core.concerns import MeetingProposal
from bikeshed_core.templates import fill_placeholders

if TYPE_CHECKING:
    from bikeshed_core.concerns import Concern
    from bikeshed_core.randomness import RandomSource

DEFAULT_MEETING_HOURS: tuple[int, ...] = (10, 14, 15)

_SATURDAY = 5
_SUNDAY = 6

MEETING_TITLES: tuple[str, ...] = (
    "Quick sync about line {LINE_NUMBER}",
    "Discussion: Your approach to {TOPIC}",
    "Alignment session: Code review for {FILE}",
    "Deep dive: The {FILE} implementation",
    "Review session: {FILE} best practices",
    "Workshop: Exploring alternatives for {CODE_SNIPPET}",
    "1:1 Code review discussion",
    "Collaborative review session",
    "Code quality discussion",
    "Technical alignment: {TOPIC}",
)

REMINDERS = {
    "useDefault": False,
    "overrides": [
        {"method": "email", "minutes": 60},
        {"method": "popup", "minutes": 15},
    ],
}


def find_slot(now: datetime, preferred_hours: Sequence[int], rng: RandomSource) -> datetime:
    """Return the start of the next weekday slot after ``now``.

    The date moves forward one day, then past a weekend if it landed on one.
    The hour is drawn from ``preferred_hours`` (DEFAULT_MEETING_HOURS when
    empty) and the time zone of ``now`` is kept.
    """
    start = now + timedelta(days=1)
    if start.weekday() == _SUNDAY:
        start += timedelta(days=1)
    elif start.weekday() == _SATURDAY:
        start += timedelta(days=2)

    hour = rng.choice(tuple(preferred_hours) or DEFAULT_MEETING_HOURS)
    return start.replace(hour=hour, minute=0, second=0, microsecond=0)


def meeting_attendees(author_email: str | None, reviewer_emails: Iterable[str] = ()) -> list[str]:
    attendees = []
    if author_email and author_email.strip():
        attendees.append(author_email.strip())
    for email in reviewer_emails:
        email = email.strip()
        if email:
            attendees.append(email)
    return attendees


def meeting_description(concern: Concern) -> str:
    return (
        f"This meeting is to discuss {concern.topic.name} in the recent pull request.\n\n"
        f"File: {concern.file}\n"
        f"Priority: {concern.topic.urgency}\n\n"
        "Topics to cover:\n"
        "- Current implementation approach\n"
        "- Best practices and alternatives\n"
        "- Action items and next steps\n\n"
        "This is an automated meeting request from the Bikeshed Bot code review system."
    )


def _time_zone_name(dt: datetime) -> str:
    # ZoneInfo exposes the IANA key; fixed offsets fall back to tzname().
    return getattr(dt.tzinfo, "key", None) or dt.tzname() or "UTC"


def build_event(
    concern: Concern,
    start: datetime,
    attendees: Sequence[str],
    rng: RandomSource,
) -> tuple[MeetingProposal, dict]:
    """Build the proposal and the Google Calendar event body for one concern."""
    end = start + timedelta(minutes=concern.topic.meeting_length_minutes)
    title = fill_placeholders(rng.choice(MEETING_TITLES), concern)
    tz_name = _time_zone_name(start)

    event = {
        "summary": f"[Code Review] {title}",
        "description": meeting_description(concern),
        "start": {"dateTime": start.isoformat(), "timeZone": tz_name},
        "end": {"dateTime": end.isoformat(), "timeZone": tz_name},
        "attendees": [{"email": email} for email in attendees],
        "reminders": {"useDefault": REMINDERS["useDefault"], "overrides": [dict(r) for r in REMINDERS["overrides"]]},
    }
    proposal = MeetingProposal(
        start_time=start,
        duration_minutes=concern.topic.meeting_length_minutes,
        attendees=tuple(attendees),
    )
    return proposal, event
