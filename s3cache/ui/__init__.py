"""Console output helpers."""

from .console import ConsoleManager, WorkflowCommandFormatter

__all__ = ["ConsoleManager", "WorkflowCommandFormatter"]
