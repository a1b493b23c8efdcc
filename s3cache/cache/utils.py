"""Helpers for archive naming, sizing, checksums and key matching."""
from __future__ import annotations

import base64
import hashlib
import math
import os
from pathlib import Path
from typing import Optional, Union

from ..constants import CACHE_FILENAMES, CompressionMethod

GIB = 1024 * 1024 * 1024


def get_compression_method() -> CompressionMethod:
    """Return the compression method used for new archives."""
    return CompressionMethod.SEVEN_ZIP


def get_cache_filename(compression_method: CompressionMethod) -> str:
    """Return the canonical archive filename for a compression method."""
    return CACHE_FILENAMES[compression_method]


def get_archive_size(file_path: Union[str, Path]) -> int:
    """Return the archive size in bytes."""
    return os.stat(file_path).st_size


def get_checksum(file_path: Union[str, Path], chunk_size: int = 1024 * 1024) -> str:
    """Compute the base64 MD5 digest of a file.

    This is the format S3 expects in the Content-MD5 header.

    Args:
        file_path: Path to the archive
        chunk_size: Read size, archives can be several GB

    Returns:
        Base64-encoded MD5 digest
    """
    md5 = hashlib.md5()
    with open(file_path, "rb") as f:
        while chunk := f.read(chunk_size):
            md5.update(chunk)
    return base64.b64encode(md5.digest()).decode("ascii")


def format_size(size_bytes: int) -> str:
    """Format a byte count as ``~N MB (B B)``."""
    size_mb = math.floor(size_bytes / (1024 * 1024) + 0.5)
    return f"~{size_mb} MB ({size_bytes} B)"


def format_limit(limit_bytes: int) -> str:
    """Format a size limit as ``5GB``, falling back to ``~N MB (B B)`` below whole GiB."""
    if limit_bytes >= GIB and limit_bytes % GIB == 0:
        return f"{limit_bytes // GIB}GB"
    return format_size(limit_bytes)


def is_exact_key_match(key: str, cache_key: Optional[str]) -> bool:
    """Check whether a matched cache key is the requested key.

    Comparison ignores case but not accents, so ``Linux-Node`` matches
    ``linux-node`` while ``node-é`` does not match ``node-e``.

    Args:
        key: Requested primary key
        cache_key: Key that was matched, if any

    Returns:
        True if both keys are equal under the comparison above
    """
    if not cache_key:
        return False
    return cache_key.casefold() == key.casefold()
