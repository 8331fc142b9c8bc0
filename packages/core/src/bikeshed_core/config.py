import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from bikeshed_core.errors import ConfigError
from bikeshed_core.scheduling import DEFAULT_MEETING_HOURS
from bikeshed_core.templates import COMMENT_STYLES, DEFAULT_STYLE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict = {
    "github-token": None,
    "enable-calendar": False,
    "google-calendar-credentials": None,  # service-account JSON, inline
    "google-calendar-id": None,
    "max-meetings-per-pr": 3,
    "min-concerns": 1,
    "comment-style": DEFAULT_STYLE,
    "add-labels": True,
    "bot-name": "Bikeshed Bot",
    "use-emojis": True,
    "timezone": "America/New_York",
    "preferred-meeting-hours": list(DEFAULT_MEETING_HOURS),
    "pr-author-email": None,
    "reviewer-emails": [],
    "extension-concern-chance": 0.7,
    "test-concern-chance": 0.5,
    "todo-concern-chance": 0.8,
}

# Every key can also be supplied as a GitHub Action input of the same name.
INPUT_NAMES: tuple[str, ...] = tuple(DEFAULT_CONFIG)

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0", ""}


def _normalize_key(key: str) -> str:
    return str(key).strip().lower().replace("_", "-")


def load_config(
    config_path: str = ".bikeshed.yml",
    inputs: Optional[dict] = None,
    overrides: Optional[dict] = None,
) -> dict:
    """
    Load raw configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .bikeshed.yml in the current directory
      3. GitHub Action inputs
      4. CLI overrides

    Keys may be written with dashes or underscores. Values are left as read;
    BotConfig.from_dict parses and validates them.
    """
    config = {**DEFAULT_CONFIG, "preferred-meeting-hours": list(DEFAULT_MEETING_HOURS), "reviewer-emails": []}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ConfigError(f"{config_path} must contain a mapping, got {type(file_config).__name__}.")
        config.update({_normalize_key(k): v for k, v in file_config.items()})

    for source in (inputs, overrides):
        if source:
            for key, value in source.items():
                if value is not None:
                    config[_normalize_key(key)] = value

    if not config.get("github-token"):
        config["github-token"] = os.environ.get("GITHUB_TOKEN")

    return config


def _as_bool(name: str, value) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{name} must be true or false, got {value!r}.")


def _as_int(name: str, value, minimum: int) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}.")
    try:
        number = int(str(value).strip()) if not isinstance(value, int) else value
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}.")
    if number < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {number}.")
    return number


def _as_probability(name: str, value) -> float:
    try:
        probability = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number between 0 and 1, got {value!r}.")
    if not 0.0 <= probability <= 1.0:
        raise ConfigError(f"{name} must be between 0 and 1, got {probability}.")
    return probability


def _as_list(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item).strip() for item in value if str(item).strip()]


def _as_hours(value) -> tuple[int, ...]:
    hours = []
    for item in _as_list(value):
        try:
            hour = int(item)
        except ValueError:
            raise ConfigError(f"preferred-meeting-hours must be integers, got {item!r}.")
        if not 0 <= hour <= 23:
            raise ConfigError(f"preferred-meeting-hours must be between 0 and 23, got {hour}.")
        hours.append(hour)
    return tuple(hours) or DEFAULT_MEETING_HOURS


def _optional_str(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class BotConfig:
    """Validated settings for one run, built once and passed to every component."""

    github_token: str
    enable_calendar: bool = False
    google_calendar_credentials: str | None = None
    google_calendar_id: str | None = None
    max_meetings_per_pr: int = 3
    min_concerns: int = 1
    comment_style: str = DEFAULT_STYLE
    add_labels: bool = True
    bot_name: str = "Bikeshed Bot"
    use_emojis: bool = True
    timezone: str = "America/New_York"
    preferred_meeting_hours: tuple[int, ...] = DEFAULT_MEETING_HOURS
    pr_author_email: str | None = None
    reviewer_emails: tuple[str, ...] = ()
    extension_concern_chance: float = 0.7
    test_concern_chance: float = 0.5
    todo_concern_chance: float = 0.8

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_dict(cls, raw: dict) -> "BotConfig":
        """Parse a merged raw config (see load_config) into a BotConfig.

        Raises ConfigError for a missing token, missing calendar settings when
        the calendar is enabled, or any value that cannot be parsed.
        """
        raw = {**DEFAULT_CONFIG, **{_normalize_key(k): v for k, v in raw.items()}}

        token = _optional_str(raw["github-token"])
        if not token:
            raise ConfigError("github-token is required. Set the action input or the GITHUB_TOKEN variable.")

        enable_calendar = _as_bool("enable-calendar", raw["enable-calendar"])
        credentials = _optional_str(raw["google-calendar-credentials"])
        calendar_id = _optional_str(raw["google-calendar-id"])
        if enable_calendar and not (credentials and calendar_id):
            raise ConfigError(
                "google-calendar-credentials and google-calendar-id are required when enable-calendar is true."
            )

        style = str(raw["comment-style"] or DEFAULT_STYLE).strip().lower()
        if style not in COMMENT_STYLES:
            logger.warning("Unknown comment-style %r, using %s", style, DEFAULT_STYLE)
            style = DEFAULT_STYLE

        timezone = str(raw["timezone"] or DEFAULT_CONFIG["timezone"]).strip()
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ConfigError(f"Unknown timezone: {timezone!r}.")

        return cls(
            github_token=token,
            enable_calendar=enable_calendar,
            google_calendar_credentials=credentials,
            google_calendar_id=calendar_id,
            max_meetings_per_pr=_as_int("max-meetings-per-pr", raw["max-meetings-per-pr"], minimum=1),
            min_concerns=_as_int("min-concerns", raw["min-concerns"], minimum=0),
            comment_style=style,
            add_labels=_as_bool("add-labels", raw["add-labels"]),
            bot_name=_optional_str(raw["bot-name"]) or DEFAULT_CONFIG["bot-name"],
            use_emojis=_as_bool("use-emojis", raw["use-emojis"]),
            timezone=timezone,
            preferred_meeting_hours=_as_hours(raw["preferred-meeting-hours"]),
            pr_author_email=_optional_str(raw["pr-author-email"]),
            reviewer_emails=tuple(_as_list(raw["reviewer-emails"])),
            extension_concern_chance=_as_probability("extension-concern-chance", raw["extension-concern-chance"]),
            test_concern_chance=_as_probability("test-concern-chance", raw["test-concern-chance"]),
            todo_concern_chance=_as_probability("todo-concern-chance", raw["todo-concern-chance"]),
        )
