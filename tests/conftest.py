"""Global pytest fixtures and configuration.

This module provides shared fixtures for all tests including:
- 7-Zip binary detection
- Workspace directories with sample dependency trees
- A fake archiver and an in-memory blob store
- A simulated GitHub Actions runner environment
"""
from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Dict, List, Sequence

import pytest

from s3cache.config import reset_config
from s3cache.host.context import GitHubActionsContext
from s3cache.services.archiver import Archiver
from s3cache.storage.memory import InMemoryBlobStore


@pytest.fixture(scope="session")
def sevenzip_binary() -> Path:
    """Locate the 7z binary, skip tests if not found.

    Returns:
        Path to the 7z binary

    Raises:
        pytest.skip: If 7-Zip is not available
    """
    sevenzip_path = shutil.which("7z")
    if not sevenzip_path:
        pytest.skip("7-Zip not available - install p7zip-full to run integration tests")
    return Path(sevenzip_path)


@pytest.fixture(autouse=True)
def clean_config():
    """Drop the cached Config singleton around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def capture_debug_logs(caplog):
    """Record everything the package logs, including DEBUG."""
    caplog.set_level(logging.DEBUG, logger="s3cache")
    return caplog


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a workspace with a small node_modules tree.

    Layout::

        workspace/
        ├── node_modules/
        │   ├── left-pad/index.js
        │   └── left-pad/package.json
        └── package-lock.json
    """
    root = tmp_path / "workspace"
    package_dir = root / "node_modules" / "left-pad"
    package_dir.mkdir(parents=True)
    (package_dir / "index.js").write_text("module.exports = leftPad;\n")
    (package_dir / "package.json").write_text('{"name": "left-pad", "version": "1.3.0"}\n')
    (root / "package-lock.json").write_text("{}\n")
    return root


@pytest.fixture
def runner_temp(tmp_path: Path) -> Path:
    """Runner temp directory, created on demand by the code under test."""
    return tmp_path / "runner-temp"


class FakeArchiver(Archiver):
    """Archiver that stores file contents as JSON instead of running 7z.

    Records every call so tests can assert on how the orchestrator used it.
    """

    def __init__(self, workspace: Path):
        self.workspace = Path(workspace)
        self.created: List[List[str]] = []
        self.extracted: List[Path] = []
        self.listed: List[Path] = []

    def create(self, archive_dir: Path, source_paths: Sequence[str]) -> Path:
        entries: Dict[str, str] = {}
        for relative_path in source_paths:
            source = self.workspace / relative_path
            files = [source] if source.is_file() else sorted(p for p in source.rglob("*") if p.is_file())
            for file_path in files:
                entries[file_path.relative_to(self.workspace).as_posix()] = file_path.read_text()

        archive_path = Path(archive_dir) / "cache.7z"
        archive_path.write_text(json.dumps(entries))
        self.created.append(list(source_paths))
        return archive_path

    def extract(self, archive_file: Path) -> None:
        entries = json.loads(Path(archive_file).read_text())
        for relative_path, content in entries.items():
            target = self.workspace / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        self.extracted.append(Path(archive_file))

    def list(self, archive_file: Path) -> str:
        self.listed.append(Path(archive_file))
        return "\n".join(sorted(json.loads(Path(archive_file).read_text())))


@pytest.fixture
def fake_archiver(workspace: Path) -> FakeArchiver:
    return FakeArchiver(workspace)


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


def read_command_file(path: Path) -> Dict[str, str]:
    """Parse ``name<<delimiter`` records written for the runner."""
    if not path.exists():
        return {}

    values: Dict[str, str] = {}
    lines = path.read_text(encoding="utf-8").splitlines()
    index = 0
    while index < len(lines):
        name, delimiter = lines[index].split("<<", 1)
        end = lines.index(delimiter, index + 1)
        values[name] = "\n".join(lines[index + 1:end])
        index = end + 1
    return values


class ActionsRunner:
    """Simulated GitHub Actions step environment.

    Inputs and state are plain environment entries; outputs and saved state
    land in files under ``root`` exactly as a real runner collects them.
    """

    def __init__(self, root: Path):
        root.mkdir(parents=True, exist_ok=True)
        self.state_file = root / "github_state"
        self.output_file = root / "github_output"
        self.env: Dict[str, str] = {
            "GITHUB_EVENT_NAME": "push",
            "GITHUB_REF": "refs/heads/feature-branch",
            "GITHUB_STATE": str(self.state_file),
            "GITHUB_OUTPUT": str(self.output_file),
        }

    def set_inputs(self, inputs: Dict[str, str]) -> None:
        for name, value in inputs.items():
            self.env[f"INPUT_{name.replace(' ', '_').upper()}"] = value

    def set_state(self, name: str, value: str) -> None:
        self.env[f"STATE_{name}"] = value

    def set_invalid_event(self, event_name: str = "commit_comment") -> None:
        self.env["GITHUB_EVENT_NAME"] = event_name
        self.env.pop("GITHUB_REF", None)

    def context(self) -> GitHubActionsContext:
        return GitHubActionsContext(self.env)

    def saved_state(self) -> Dict[str, str]:
        return read_command_file(self.state_file)

    def outputs(self) -> Dict[str, str]:
        return read_command_file(self.output_file)


@pytest.fixture
def actions_runner(tmp_path: Path) -> ActionsRunner:
    return ActionsRunner(tmp_path / "runner")


def messages_at(caplog: pytest.LogCaptureFixture, level: int) -> List[str]:
    """Messages logged at exactly ``level``."""
    return [record.getMessage() for record in caplog.records if record.levelno == level]


@pytest.fixture
def log_messages(caplog):
    """Return a helper that lists captured messages for one level."""
    def _messages(level: int) -> List[str]:
        return messages_at(caplog, level)
    return _messages
