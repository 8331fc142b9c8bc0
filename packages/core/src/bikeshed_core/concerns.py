"""Concern generation: turn a PR's changed files into discussion points."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Sequence

from bikeshed_core.severity import DISCUSSION_NEEDED, FOLLOW_UP_NEEDED, WORTH_DISCUSSING, assign_severity
from bikeshed_core.topics import TEST_COVERAGE_TOPIC, TODO_TOPIC, TOPIC_CATALOG, Topic

if TYPE_CHECKING:
    from bikeshed_core.config import BotConfig
    from bikeshed_core.randomness import RandomSource

DEFAULT_SNIPPET = "the implementation"
FILLER_FILE = "overall approach"
MAX_SAMPLED_LINE = 50


@dataclass(frozen=True)
class FileDiff:
    filename: str
    patch_lines: tuple[str, ...] = ()

    @classmethod
    def from_patch(cls, filename: str, patch: str | None) -> FileDiff:
        return cls(filename=filename, patch_lines=tuple(patch.split("\n")) if patch else ())

    @property
    def added_lines(self) -> list[str]:
        """Added lines of the patch with the leading ``+`` removed."""
        return [line[1:] for line in self.patch_lines if line.startswith("+")]


@dataclass(frozen=True)
class MeetingProposal:
    start_time: datetime
    duration_minutes: int
    attendees: tuple[str, ...] = ()
    link: str | None = None


@dataclass
class Concern:
    """One synthesized discussion point.

    Everything except ``meeting`` is fixed at generation time; the pipeline
    attaches a MeetingProposal once a calendar slot has been booked.
    """

    file: str
    topic: Topic
    severity: str
    line: int | None = None
    code_snippet: str | None = None
    meeting: MeetingProposal | None = field(default=None, compare=False)


def _file_concerns(diff: FileDiff, config: BotConfig, rng: RandomSource) -> list[Concern]:
    found: list[Concern] = []
    added = diff.added_lines

    if "." in diff.filename and rng.chance(config.extension_concern_chance):
        found.append(
            Concern(
                file=diff.filename,
                line=rng.randint(1, MAX_SAMPLED_LINE),
                topic=rng.choice(TOPIC_CATALOG),
                severity=assign_severity(rng),
                code_snippet=(added[0] if added else "") or DEFAULT_SNIPPET,
            )
        )

    if "test" in diff.filename and rng.chance(config.test_concern_chance):
        found.append(Concern(file=diff.filename, topic=TEST_COVERAGE_TOPIC, severity=DISCUSSION_NEEDED))

    if any("TODO" in line for line in added) and rng.chance(config.todo_concern_chance):
        found.append(Concern(file=diff.filename, topic=TODO_TOPIC, severity=FOLLOW_UP_NEEDED))

    return found


def generate_concerns(files: Sequence[FileDiff], config: BotConfig, rng: RandomSource) -> list[Concern]:
    """Build the ordered concern list for one pull request.

    Order is file order, then rule order within a file, then filler. The
    result always holds at least one concern and never more than
    ``config.max_meetings_per_pr``.
    """
    concerns: list[Concern] = []
    for diff in files:
        concerns.extend(_file_concerns(diff, config, rng))

    floor = max(config.min_concerns, 1)
    while len(concerns) < floor:
        concerns.append(Concern(file=FILLER_FILE, topic=rng.choice(TOPIC_CATALOG), severity=WORTH_DISCUSSING))

    return concerns[: config.max_meetings_per_pr]
