from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bikeshed_core.concerns import Concern

NEEDS_DISCUSSION = "needs-discussion"
BIKESHED_REVIEW = "bikeshed-review"


def labels_for(concern: Concern) -> list[str]:
    """Labels to add to the PR for one concern; the severity becomes the priority suffix."""
    return [NEEDS_DISCUSSION, f"priority-{concern.severity.lower()}", BIKESHED_REVIEW]
