"""Archive creation and extraction.

``Archiver`` is the narrow interface the orchestrator depends on;
``SevenZipArchiver`` implements it by running the ``7z`` command line tool
from the workspace root, so archive entries are stored relative to the
workspace and extract back to the same relative locations.
"""
from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

from ..config import Config
from ..constants import CACHE_FILENAMES, CompressionMethod
from ..errors import CacheTransferError
from ..utils.tool_errors import handle_tool_errors
from .sevenzip_core import build_create_cmd, build_extract_cmd, build_list_cmd, write_list_file

logger = logging.getLogger(__name__)

LIST_FILENAME = "manifest.txt"


class Archiver(ABC):
    """Builds and unpacks a single archive file."""

    @abstractmethod
    def create(self, archive_dir: Path, source_paths: Sequence[str]) -> Path:
        """Create an archive of ``source_paths`` inside ``archive_dir``.

        Args:
            archive_dir: Directory that receives the archive file
            source_paths: Workspace-relative paths to include

        Returns:
            Path to the created archive

        Raises:
            CacheTransferError: If the archive could not be built
        """

    @abstractmethod
    def extract(self, archive_file: Path) -> None:
        """Extract an archive into the workspace.

        Raises:
            CacheTransferError: If extraction fails
        """

    @abstractmethod
    def list(self, archive_file: Path) -> str:
        """Return a human-readable listing of the archive contents."""


class SevenZipArchiver(Archiver):
    """Archiver backed by the ``7z`` executable."""

    def __init__(
        self,
        workspace: Path,
        binary: str = "7z",
        timeout: int = 3600,
        compression_method: CompressionMethod = CompressionMethod.SEVEN_ZIP,
    ):
        self.workspace = Path(workspace)
        self.binary = binary
        self.timeout = timeout
        self.compression_method = compression_method

    @classmethod
    def from_config(cls, config: Config) -> "SevenZipArchiver":
        """Create an archiver from runner configuration."""
        return cls(
            workspace=config.workspace,
            binary=config.seven_zip_binary,
            timeout=config.archive_timeout,
        )

    def _run(self, cmd: List[str]) -> str:
        logger.debug(f"Running: {' '.join(cmd)}")
        result = subprocess.run(
            cmd,
            cwd=str(self.workspace),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
            timeout=self.timeout,
        )
        return result.stdout

    @handle_tool_errors("Archive creation")
    def create(self, archive_dir: Path, source_paths: Sequence[str]) -> Path:
        archive_dir = Path(archive_dir)
        archive_path = archive_dir / CACHE_FILENAMES[self.compression_method]
        list_file = write_list_file(archive_dir / LIST_FILENAME, source_paths)

        try:
            self._run(build_create_cmd(self.binary, archive_path, list_file))
        finally:
            list_file.unlink(missing_ok=True)

        if not archive_path.exists():
            raise CacheTransferError(f"7z completed but archive not found: {archive_path}")
        return archive_path

    @handle_tool_errors("Archive extraction")
    def extract(self, archive_file: Path) -> None:
        self.workspace.mkdir(parents=True, exist_ok=True)
        self._run(build_extract_cmd(self.binary, archive_file))

    @handle_tool_errors("Archive listing")
    def list(self, archive_file: Path) -> str:
        return self._run(build_list_cmd(self.binary, archive_file))
