from __future__ import annotations

import logging

from rich.logging import RichHandler

from bikeshed_core.gh.actions import WorkflowCommandHandler, running_in_actions


def configure_logging(verbose: bool = False) -> None:
    """Route bikeshed loggers to Actions annotations in CI, or to rich locally."""
    if running_in_actions():
        handler: logging.Handler = WorkflowCommandHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = RichHandler(show_path=False, markup=False)

    for name in ("bikeshed_core", "bikeshed_cli"):
        log = logging.getLogger(name)
        log.handlers = [handler]
        log.setLevel(logging.DEBUG if verbose else logging.INFO)
