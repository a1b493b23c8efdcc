"""Tests for console UI components."""

import logging

from rich.logging import RichHandler

from s3cache.ui.console import ConsoleManager, WorkflowCommandFormatter, running_in_actions


def _record(level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord("s3cache.test", level, __file__, 1, message, None, None)


class TestWorkflowCommandFormatter:
    """Test mapping of log levels to workflow commands."""

    def test_levels(self):
        formatter = WorkflowCommandFormatter()

        assert formatter.format(_record(logging.DEBUG, "Resolved Keys:")) == "::debug::Resolved Keys:"
        assert formatter.format(_record(logging.INFO, "Cache restored")) == "Cache restored"
        assert formatter.format(_record(logging.WARNING, "too big")) == "::warning::too big"
        assert formatter.format(_record(logging.ERROR, "failed")) == "::error::failed"

    def test_multiline_message_escaped(self):
        formatter = WorkflowCommandFormatter()

        assert formatter.format(_record(logging.WARNING, "50% done\nnext")) == (
            "::warning::50%25 done%0Anext"
        )


class TestConsoleManager:
    """Test console manager functionality."""

    def test_running_in_actions(self):
        assert running_in_actions({"GITHUB_ACTIONS": "true"}) is True
        assert running_in_actions({}) is False

    def test_setup_logging_actions_mode(self):
        """Test logging setup inside a runner."""
        console_manager = ConsoleManager(verbose=True, github_actions=True)
        logger = logging.getLogger("test_actions_logger")
        logger.handlers.clear()

        console_manager.setup_logging(logger)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, WorkflowCommandFormatter)
        assert logger.level == logging.DEBUG
        # Verify no duplicate handlers on second call
        console_manager.setup_logging(logger)
        assert len(logger.handlers) == 1

    def test_setup_logging_rich_mode(self):
        """Test logging setup outside a runner."""
        console_manager = ConsoleManager(verbose=False, github_actions=False)
        logger = logging.getLogger("test_rich_logger")
        logger.handlers.clear()

        console_manager.setup_logging(logger)
        console_manager.setup_logging(logger)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.level == logging.INFO

    def test_actions_output_goes_to_stdout(self, capsys):
        console_manager = ConsoleManager(github_actions=True)
        logger = logging.getLogger("test_actions_stdout_logger")
        logger.handlers.clear()
        logger.propagate = False
        console_manager.setup_logging(logger)

        logger.warning("Cache size too large")

        assert "::warning::Cache size too large" in capsys.readouterr().out
