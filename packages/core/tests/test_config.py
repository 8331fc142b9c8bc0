"""Tests for configuration loading and validation."""

import logging

import pytest

from bikeshed_core.config import BotConfig, load_config
from bikeshed_core.errors import ConfigError


@pytest.fixture(autouse=True)
def _no_env_token(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["max-meetings-per-pr"] == 3
    assert config["min-concerns"] == 1
    assert config["comment-style"] == "constructive"
    assert config["enable-calendar"] is False
    assert config["preferred-meeting-hours"] == [10, 14, 15]
    assert config["github-token"] is None


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".bikeshed.yml"
    cfg.write_text("comment-style: formal\nmax_meetings_per_pr: 5\n")
    config = load_config(config_path=str(cfg))
    assert config["comment-style"] == "formal"
    assert config["max-meetings-per-pr"] == 5


def test_non_mapping_config_file_raises(tmp_path):
    cfg = tmp_path / ".bikeshed.yml"
    cfg.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config(config_path=str(cfg))


def test_inputs_override_config_file(tmp_path):
    cfg = tmp_path / ".bikeshed.yml"
    cfg.write_text("bot-name: File Bot\n")
    config = load_config(config_path=str(cfg), inputs={"bot-name": "Input Bot"})
    assert config["bot-name"] == "Input Bot"


def test_overrides_beat_inputs(tmp_path):
    config = load_config(
        config_path=str(tmp_path / "nonexistent.yml"),
        inputs={"comment-style": "friendly"},
        overrides={"comment-style": "formal"},
    )
    assert config["comment-style"] == "formal"


def test_none_overrides_ignored(tmp_path):
    cfg = tmp_path / ".bikeshed.yml"
    cfg.write_text("comment-style: friendly\n")
    config = load_config(config_path=str(cfg), overrides={"comment-style": None})
    assert config["comment-style"] == "friendly"


def test_env_token_used_as_fallback(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["github-token"] == "env-token"


def test_explicit_token_beats_env(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"), inputs={"github-token": "input-token"})
    assert config["github-token"] == "input-token"


def test_hours_list_is_not_shared_reference(tmp_path):
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["preferred-meeting-hours"].append(9)
    assert config_b["preferred-meeting-hours"] == [10, 14, 15]


class TestBotConfig:
    def test_defaults(self):
        config = BotConfig.from_dict({"github-token": "tok"})
        assert config.max_meetings_per_pr == 3
        assert config.min_concerns == 1
        assert config.comment_style == "constructive"
        assert config.add_labels is True
        assert config.use_emojis is True
        assert config.bot_name == "Bikeshed Bot"
        assert config.timezone == "America/New_York"
        assert config.preferred_meeting_hours == (10, 14, 15)
        assert config.extension_concern_chance == 0.7
        assert config.test_concern_chance == 0.5
        assert config.todo_concern_chance == 0.8

    def test_missing_token_raises(self):
        with pytest.raises(ConfigError, match="github-token"):
            BotConfig.from_dict({})

    def test_parses_action_input_strings(self):
        config = BotConfig.from_dict(
            {
                "github-token": "tok",
                "max-meetings-per-pr": "5",
                "min-concerns": "2",
                "add-labels": "false",
                "use-emojis": "FALSE",
                "preferred-meeting-hours": "9, 11,16",
                "reviewer-emails": "a@x.io, b@x.io,",
                "pr-author-email": "  ",
            }
        )
        assert config.max_meetings_per_pr == 5
        assert config.min_concerns == 2
        assert config.add_labels is False
        assert config.use_emojis is False
        assert config.preferred_meeting_hours == (9, 11, 16)
        assert config.reviewer_emails == ("a@x.io", "b@x.io")
        assert config.pr_author_email is None

    def test_underscore_keys_accepted(self):
        config = BotConfig.from_dict({"github_token": "tok", "comment_style": "friendly"})
        assert config.comment_style == "friendly"

    def test_calendar_requires_credentials(self):
        with pytest.raises(ConfigError, match="google-calendar"):
            BotConfig.from_dict({"github-token": "tok", "enable-calendar": "true"})

    def test_calendar_enabled(self):
        config = BotConfig.from_dict(
            {
                "github-token": "tok",
                "enable-calendar": "true",
                "google-calendar-credentials": "{}",
                "google-calendar-id": "team@example.com",
            }
        )
        assert config.enable_calendar is True

    @pytest.mark.parametrize(
        "key,value",
        [
            ("timezone", "Mars/Olympus_Mons"),
            ("preferred-meeting-hours", "10,25"),
            ("preferred-meeting-hours", "ten"),
            ("max-meetings-per-pr", "0"),
            ("max-meetings-per-pr", "three"),
            ("max-meetings-per-pr", True),
            ("min-concerns", False),
            ("min-concerns", "-1"),
            ("add-labels", "maybe"),
            ("todo-concern-chance", "1.5"),
        ],
    )
    def test_invalid_values_raise(self, key, value):
        with pytest.raises(ConfigError):
            BotConfig.from_dict({"github-token": "tok", key: value})

    def test_unknown_style_falls_back_to_default(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bikeshed_core.config"):
            config = BotConfig.from_dict({"github-token": "tok", "comment-style": "sarcastic"})
        assert config.comment_style == "constructive"
        assert "Unknown comment-style 'sarcastic'" in caplog.text

    def test_empty_hours_fall_back_to_default(self):
        config = BotConfig.from_dict({"github-token": "tok", "preferred-meeting-hours": ""})
        assert config.preferred_meeting_hours == (10, 14, 15)

    def test_is_frozen(self):
        config = BotConfig.from_dict({"github-token": "tok"})
        with pytest.raises(AttributeError):
            config.bot_name = "other"
