"""In-memory blob store.

Keeps archives in a dict, guarded by an RLock. Used to exercise the
orchestrator without network access and for local dry runs.
"""
from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import Dict, Optional, Set, Tuple, Union

from ..errors import CacheEntryNotFoundError, CacheTransferError
from .base import BlobStore

logger = logging.getLogger(__name__)


class InMemoryBlobStore(BlobStore):
    """Thread-safe dict-backed blob store.

    Attributes:
        uploads (int): Number of upload calls served
        downloads (int): Number of download calls served
    """

    def __init__(self):
        self._blobs: Dict[str, Tuple[bytes, Optional[str]]] = {}
        self._lock = RLock()
        self.uploads = 0
        self.downloads = 0

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._blobs

    def upload(self, key: str, file_path: Union[str, Path], checksum: str) -> None:
        try:
            data = Path(file_path).read_bytes()
        except OSError as e:
            raise CacheTransferError(f"System error during cache upload: {e}") from e

        with self._lock:
            self._blobs[key] = (data, checksum)
            self.uploads += 1
        logger.debug(f"Stored {len(data)} bytes under {key}")

    def download(self, key: str) -> bytes:
        with self._lock:
            if key not in self._blobs:
                raise CacheEntryNotFoundError(f"Cache entry not found for key: {key}")
            self.downloads += 1
            return self._blobs[key][0]

    def stored_checksum(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._blobs.get(key)
            return entry[1] if entry else None

    def put_bytes(self, key: str, data: bytes, checksum: Optional[str] = None) -> None:
        """Seed an entry directly, bypassing the file-based upload path."""
        with self._lock:
            self._blobs[key] = (data, checksum)

    def keys(self) -> Set[str]:
        """Get all stored keys."""
        with self._lock:
            return set(self._blobs.keys())
