"""Console management for log output.

This module provides a ConsoleManager that adapts output to:
- GitHub Actions workflow commands (``::debug::``, ``::warning::``,
  ``::error::``) when running inside a runner
- Rich-rendered color output everywhere else
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Optional

from rich.console import Console
from rich.logging import RichHandler


def _escape_data(message: str) -> str:
    """Escape a message so the runner keeps it on one annotation line."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """Format records as GitHub Actions workflow commands.

    INFO records are printed as plain text; other levels become the
    matching ``::level::`` command.
    """

    COMMANDS = {
        logging.DEBUG: "debug",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def __init__(self):
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = self.COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{_escape_data(message)}"


def running_in_actions(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check whether the process runs inside a GitHub Actions job."""
    env = os.environ if environ is None else environ
    return env.get("GITHUB_ACTIONS", "").lower() == "true"


class ConsoleManager:
    """Manages console output for the cache commands."""

    def __init__(self, verbose: bool = False, github_actions: Optional[bool] = None):
        self.verbose = verbose
        self.github_actions = running_in_actions() if github_actions is None else github_actions

        if self.github_actions:
            self.console = None
        else:
            self.console = Console(stderr=True)

    def setup_logging(self, logger: logging.Logger) -> None:
        """Configure logging with a workflow-command or Rich handler.

        Adds a handler and sets logger level based on `verbose`.
        """

        # Prevent duplicate handlers if called multiple times
        def _has_handler_of_type(h_type):
            return any(isinstance(h, h_type) for h in logger.handlers)

        if self.github_actions:
            if not any(isinstance(h.formatter, WorkflowCommandFormatter) for h in logger.handlers):
                # Workflow commands are only recognized on stdout
                handler = logging.StreamHandler(sys.stdout)
                handler.setFormatter(WorkflowCommandFormatter())
                logger.addHandler(handler)
        else:
            if not _has_handler_of_type(RichHandler):
                handler = RichHandler(
                    console=self.console,
                    show_time=True,
                    show_path=self.verbose,
                    rich_tracebacks=True,
                )
                logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if self.verbose else logging.INFO)
