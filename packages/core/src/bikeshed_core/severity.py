"""Concern severities.

The five values in SEVERITIES are the ones drawn at random for detected
concerns. FOLLOW_UP_NEEDED and WORTH_DISCUSSING are only ever assigned by the
TODO rule and the filler loop. They surface verbatim in label names
(``priority-follow_up_needed``), so they are kept as separate literals.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bikeshed_core.randomness import RandomSource

CRITICAL = "CRITICAL"
HIGH = "HIGH"
MEDIUM = "MEDIUM"
DISCUSSION_NEEDED = "DISCUSSION_NEEDED"
WORTH_NOTING = "WORTH_NOTING"

SEVERITIES: tuple[str, ...] = (CRITICAL, HIGH, MEDIUM, DISCUSSION_NEEDED, WORTH_NOTING)

FOLLOW_UP_NEEDED = "FOLLOW_UP_NEEDED"
WORTH_DISCUSSING = "WORTH_DISCUSSING"


def assign_severity(rng: RandomSource) -> str:
    return rng.choice(SEVERITIES)
