"""Shared fakes and fixtures for bikeshed_core tests."""

from __future__ import annotations

import pytest

from bikeshed_core.config import BotConfig
from bikeshed_core.gcal.client import InsertedEvent
from bikeshed_core.randomness import RandomSource


class ScriptedRandom(RandomSource):
    """RandomSource with fixed answers.

    chance() returns ``fire``; choice() returns ``items[pick % len(items)]``;
    randint() returns ``number`` clamped into range.
    """

    def __init__(self, fire: bool = True, pick: int = 0, number: int = 7):
        super().__init__(seed=0)
        self.fire = fire
        self.pick = pick
        self.number = number
        self.chances: list[float] = []

    def randint(self, low, high):
        return min(max(self.number, low), high)

    def choice(self, items):
        return items[self.pick % len(items)]

    def chance(self, probability):
        self.chances.append(probability)
        return self.fire


class StubPlatform:
    """In-memory hosting API that records every call."""

    def __init__(self, files=None, label_error=None, post_error=None, fail_post_at=None):
        self.files = files or []
        self.comments: list[str] = []
        self.labels: list[list[str]] = []
        self.calls: list[str] = []
        self._label_error = label_error
        self._post_error = post_error
        self._fail_post_at = fail_post_at

    def list_changed_files(self, repo_name, pr_number):
        self.calls.append("list_changed_files")
        return list(self.files)

    def post_comment(self, repo_name, issue_number, body):
        self.calls.append("post_comment")
        if self._post_error is not None and len(self.comments) == (self._fail_post_at or 0):
            raise self._post_error
        self.comments.append(body)

    def add_labels(self, repo_name, issue_number, labels):
        self.calls.append("add_labels")
        if self._label_error is not None:
            raise self._label_error
        self.labels.append(list(labels))


class StubCalendar:
    def __init__(self, error=None, link="https://calendar.example/event", confirmed_start=None):
        self.events: list[dict] = []
        self._error = error
        self._link = link
        self._confirmed_start = confirmed_start

    def insert_event(self, event):
        self.events.append(event)
        if self._error is not None:
            raise self._error
        return InsertedEvent(link=self._link, confirmed_start=self._confirmed_start)


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture
def stub_platform():
    return StubPlatform


@pytest.fixture
def stub_calendar():
    return StubCalendar


@pytest.fixture
def make_config():
    def _make(**kwargs) -> BotConfig:
        kwargs.setdefault("github_token", "tok")
        return BotConfig(**kwargs)

    return _make
