"""Comment rendering: the overview comment and one comment per concern.

Templates use ``{PLACEHOLDER}`` tokens rather than str.format fields so that
a token we do not know about is left in the text as-is instead of raising.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from bikeshed_core.concerns import Concern
    from bikeshed_core.randomness import RandomSource

DEFAULT_STYLE = "constructive"
SNIPPET_FALLBACK = "this implementation"
LINE_FALLBACK = "1"

COMMENT_TEMPLATES: dict[str, tuple[str, ...]] = {
    "constructive": (
        "I noticed {FILE} implements {TOPIC}. Let's discuss potential optimizations.",
        "The approach in {FILE} raises some questions about {TOPIC}. Could we explore alternatives?",
        "Regarding {CODE_SNIPPET}: This implementation would benefit from a brief discussion about {TOPIC}.",
        "I see you've implemented {TOPIC} in {FILE}. Let's align on best practices.",
        "This is an interesting approach to {TOPIC}. A quick sync would help ensure we're aligned.",
    ),
    "friendly": (
        "Hey! I noticed an interesting pattern in {FILE}. Would love to discuss {TOPIC} when you have a chance! 😊",
        "Great work on {FILE}! I have some thoughts about {TOPIC} that might be worth exploring together.",
        "Thanks for this PR! Quick question about {CODE_SNIPPET} - could we chat about the approach?",
    ),
    "formal": (
        "Regarding {FILE}: The implementation of {TOPIC} warrants further discussion.",
        "Technical review note: {CODE_SNIPPET} in {FILE} presents an opportunity for architectural alignment.",
        "Code review finding: {TOPIC} implementation requires stakeholder input.",
    ),
}

COMMENT_STYLES: tuple[str, ...] = tuple(COMMENT_TEMPLATES)


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    return f"{day}" + {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_meeting_time(dt: datetime) -> str:
    """Human-readable slot, e.g. "October 20th 2026, 2:00 pm"."""
    hour = dt.hour % 12 or 12
    meridiem = "am" if dt.hour < 12 else "pm"
    return f"{dt.strftime('%B')} {_ordinal(dt.day)} {dt.year}, {hour}:{dt.minute:02d} {meridiem}"


def fill_placeholders(template: str, concern: Concern) -> str:
    """Substitute every known placeholder with the concern's fields."""
    values = {
        "{FILE}": concern.file,
        "{TOPIC}": concern.topic.name,
        "{CODE_SNIPPET}": concern.code_snippet or SNIPPET_FALLBACK,
        "{URGENCY}": concern.topic.urgency,
        "{LINE_NUMBER}": str(concern.line) if concern.line else LINE_FALLBACK,
    }
    text = template
    for token, value in values.items():
        text = text.replace(token, value)
    return text


def render_overview(
    concerns: Sequence[Concern],
    bot_name: str,
    use_emojis: bool = True,
    calendar_enabled: bool = False,
) -> str:
    count = len(concerns)
    noun = "area" if count == 1 else "areas"
    robot = "🤖 " if use_emojis else ""

    lines = [
        f"## {robot}{bot_name} Review\n",
        f"I've completed my review of this PR and identified **{count} {noun}** for discussion:\n",
    ]
    for i, concern in enumerate(concerns, 1):
        lines.append(f"{i}. **{concern.topic.name}** in `{concern.file}` ({concern.topic.urgency})")

    if calendar_enabled:
        closing = ("📅 " if use_emojis else "") + "Meeting invitations will be sent for detailed discussions."
    else:
        closing = ("💬 " if use_emojis else "") + "Let's discuss these points in the PR comments."
    lines.append(f"\n{closing}")
    lines.append("\n*This automated review helps ensure code quality through collaborative discussion.*")
    return "\n".join(lines)


def render_concern(concern: Concern, style: str, rng: RandomSource, use_emojis: bool = True) -> str:
    templates = COMMENT_TEMPLATES.get(style, COMMENT_TEMPLATES[DEFAULT_STYLE])
    comment = fill_placeholders(rng.choice(templates), concern)

    meeting = concern.meeting
    if meeting is not None:
        calendar = "📅 " if use_emojis else ""
        comment += (
            f"\n\n{calendar}**Meeting Details:**\n"
            f"- Time: {format_meeting_time(meeting.start_time)}\n"
            f"- Duration: {meeting.duration_minutes} minutes\n"
            f"- Topic: {concern.topic.name}"
        )
    return comment
