"""Host context: action inputs, outputs and step state.

The CI runner hands inputs to the process through environment variables and
collects outputs and state through files it names in the environment.
``GitHubActionsContext`` implements that protocol; the commands only see the
``HostContext`` interface.
"""
from __future__ import annotations

import logging
import os
import sys
import uuid
from abc import ABC, abstractmethod
from typing import List, MutableMapping, Optional

from ..constants import Events
from ..errors import InputRequiredError

logger = logging.getLogger(__name__)


class HostContext(ABC):
    """Abstract access to the CI host's inputs, outputs and state."""

    @abstractmethod
    def get_input(self, name: str, required: bool = False) -> str:
        """Get a trimmed input value, empty string when unset.

        Raises:
            InputRequiredError: If required and the input is empty
        """

    @abstractmethod
    def save_state(self, name: str, value: str) -> None:
        """Persist a value for later steps of the same job."""

    @abstractmethod
    def get_state(self, name: str) -> str:
        """Read a value saved by an earlier step, empty string when unset."""

    @abstractmethod
    def set_output(self, name: str, value: str) -> None:
        """Set a step output."""

    @abstractmethod
    def is_debug(self) -> bool:
        """Whether the runner has step debug logging enabled."""

    @abstractmethod
    def event_name(self) -> str:
        """Name of the event that triggered the job."""

    @abstractmethod
    def is_valid_event(self) -> bool:
        """Whether the triggering event is tied to a branch or tag ref."""

    def get_input_list(self, name: str, required: bool = False) -> List[str]:
        """Get a newline-separated input as a list of non-empty lines."""
        value = self.get_input(name, required=required)
        return [line.strip() for line in value.split("\n") if line.strip()]

    def get_input_int(self, name: str) -> Optional[int]:
        """Get a non-negative integer input, None when unset or invalid."""
        try:
            value = int(self.get_input(name))
        except ValueError:
            return None
        if value < 0:
            return None
        return value


def _input_env_name(name: str) -> str:
    return f"INPUT_{name.replace(' ', '_').upper()}"


class GitHubActionsContext(HostContext):
    """Host context backed by the GitHub Actions runner protocol.

    Inputs are read from ``INPUT_<NAME>`` variables, state from
    ``STATE_<name>``. Outputs and state are appended to the files named by
    ``GITHUB_OUTPUT`` and ``GITHUB_STATE``; older runners without those files
    get the legacy workflow commands on stdout instead.
    """

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def get_input(self, name: str, required: bool = False) -> str:
        env_name = _input_env_name(name)
        value = self._environ.get(env_name)
        if value is None:
            # Runners keep hyphens; some wrappers replace them
            value = self._environ.get(env_name.replace("-", "_"), "")
        value = value.strip()

        if required and not value:
            raise InputRequiredError(name)
        return value

    def save_state(self, name: str, value: str) -> None:
        if not self._write_file_command("GITHUB_STATE", name, value):
            sys.stdout.write(f"::save-state name={name}::{value}{os.linesep}")
        logger.debug(f"Saved state {name}={value}")

    def get_state(self, name: str) -> str:
        return self._environ.get(f"STATE_{name}", "")

    def set_output(self, name: str, value: str) -> None:
        if not self._write_file_command("GITHUB_OUTPUT", name, value):
            sys.stdout.write(f"{os.linesep}::set-output name={name}::{value}{os.linesep}")

    def is_debug(self) -> bool:
        return self._environ.get("RUNNER_DEBUG") == "1"

    def event_name(self) -> str:
        return self._environ.get(Events.KEY, "")

    def is_valid_event(self) -> bool:
        return bool(self._environ.get(Events.REF))

    def _write_file_command(self, env_name: str, name: str, value: str) -> bool:
        """Append a ``name<<delimiter`` record to a runner command file.

        Returns:
            False if the runner did not provide the file
        """
        file_path = self._environ.get(env_name)
        if not file_path:
            return False

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in value:
            raise ValueError(f"Unexpected input: name or value contains the delimiter {delimiter}")

        with open(file_path, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}{os.linesep}{value}{os.linesep}{delimiter}{os.linesep}")
        return True
