"""GitHub Actions runtime: event context, inputs, outputs, workflow commands.

The runner exposes the triggering event through GITHUB_EVENT_NAME and a JSON
payload at GITHUB_EVENT_PATH, action inputs as INPUT_<NAME> variables, and
collects step outputs from the file named by GITHUB_OUTPUT.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

logger = logging.getLogger(__name__)


@dataclass
class ActionContext:
    event_name: str
    repository: str
    payload: dict = field(default_factory=dict)

    @property
    def pr_number(self) -> int | None:
        pull = self.payload.get("pull_request") or {}
        number = pull.get("number") or self.payload.get("number")
        return int(number) if number else None


def running_in_actions(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get("GITHUB_ACTIONS") == "true"


def load_context(environ: Mapping[str, str] | None = None) -> ActionContext:
    env = os.environ if environ is None else environ
    payload: dict = {}
    event_path = env.get("GITHUB_EVENT_PATH")
    if event_path and Path(event_path).exists():
        with open(event_path, encoding="utf-8") as f:
            payload = json.load(f) or {}
    else:
        logger.debug("No event payload found at %r", event_path)
    return ActionContext(
        event_name=env.get("GITHUB_EVENT_NAME", ""),
        repository=env.get("GITHUB_REPOSITORY", ""),
        payload=payload,
    )


def _input_variable(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    return env.get(_input_variable(name), "").strip()


def read_inputs(names: Iterable[str], environ: Mapping[str, str] | None = None) -> dict:
    """Return the inputs that were actually provided; empty strings are treated as unset."""
    inputs = {}
    for name in names:
        value = get_input(name, environ)
        if value:
            inputs[name] = value
    return inputs


def set_output(name: str, value, environ: Mapping[str, str] | None = None) -> None:
    env = os.environ if environ is None else environ
    output_path = env.get("GITHUB_OUTPUT")
    if not output_path:
        logger.info("Output %s=%s", name, value)
        return
    with open(output_path, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")


def escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def workflow_command(command: str, message: str) -> str:
    return f"::{command}::{escape_data(message)}"


def set_failed(message: str) -> None:
    """Report a failed run. The caller decides the exit code."""
    print(workflow_command("error", message), file=sys.stdout, flush=True)


class WorkflowCommandHandler(logging.Handler):
    """Log handler that renders records as Actions workflow commands.

    WARNING and above become ``::warning::`` / ``::error::`` annotations on
    the run; DEBUG becomes ``::debug::`` (shown only with step debugging on);
    everything else is printed as plain log text.
    """

    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                line = workflow_command("error", message)
            elif record.levelno >= logging.WARNING:
                line = workflow_command("warning", message)
            elif record.levelno <= logging.DEBUG:
                line = workflow_command("debug", message)
            else:
                line = message
            stream = self.stream if self.stream is not None else sys.stdout
            stream.write(line + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)
