from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Topic:
    name: str
    meeting_length_minutes: int
    urgency: str


TOPIC_CATALOG: tuple[Topic, ...] = (
    Topic("naming conventions", 180, "critical"),
    Topic("whitespace philosophy", 120, "urgent"),
    Topic("variable name choice", 240, "important"),
    Topic("code formatting strategy", 90, "essential"),
    Topic("indentation patterns", 180, "high-priority"),
    Topic("comment formatting standards", 150, "immediate"),
    Topic("architectural design patterns", 300, "strategic"),
    Topic("code structure and organization", 240, "foundational"),
    Topic("syntax style consistency", 180, "critical"),
    Topic("function design principles", 210, "architectural"),
)

# Not part of the catalog: only the test-file and TODO rules produce these.
TEST_COVERAGE_TOPIC = Topic("test coverage approach", 240, "quality-focused")
TODO_TOPIC = Topic("TODO items and technical debt", 180, "planning-required")
