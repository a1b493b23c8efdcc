"""Blob store interface.

A blob store maps a cache key to the bytes of one archive. Entries are
either present or absent; there is no versioning, and a second upload
under the same key silently replaces the first (last write wins).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union


class BlobStore(ABC):
    """Key-addressed storage for cache archives."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether an entry is stored under ``key``.

        Returns:
            True if present; absence is not an error

        Raises:
            CacheTransferError: If the store could not be queried
        """

    @abstractmethod
    def upload(self, key: str, file_path: Union[str, Path], checksum: str) -> None:
        """Store a file's bytes under ``key`` with its checksum.

        Args:
            key: Cache key
            file_path: Local archive to upload
            checksum: Base64 MD5 of the file, sent as integrity metadata

        Raises:
            CacheTransferError: If the upload fails
        """

    @abstractmethod
    def download(self, key: str) -> bytes:
        """Fetch the full content stored under ``key``.

        Raises:
            CacheEntryNotFoundError: If no entry is stored under ``key``
            CacheTransferError: If the download fails
        """

    def stored_checksum(self, key: str) -> Optional[str]:
        """Return the checksum recorded at upload time, if the store keeps one."""
        return None
