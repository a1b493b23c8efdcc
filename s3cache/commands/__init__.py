"""Command modules for the CLI."""

from .cli_utils import build_orchestrator, create_parser, setup_logging
from .restore_command import restore_command
from .save_command import save_command

__all__ = [
    "build_orchestrator",
    "create_parser",
    "restore_command",
    "save_command",
    "setup_logging",
]
