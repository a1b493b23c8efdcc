"""Validation of cache keys and path lists.

Both validators raise ValidationError and have no side effects, so they can
run before any temporary resources or storage clients are created.
"""
from __future__ import annotations

from typing import Optional, Sequence

from ..constants import MAX_KEY_LENGTH
from ..errors import ValidationError


def validate_paths(paths: Optional[Sequence[str]]) -> None:
    """Ensure at least one path pattern was supplied.

    Args:
        paths: Path patterns to cache

    Raises:
        ValidationError: If paths is None or empty
    """
    if not paths:
        raise ValidationError(
            "Path Validation Error: At least one directory or file path is required"
        )


def validate_key(key: str) -> None:
    """Ensure a cache key is usable as a storage key.

    Args:
        key: Cache key

    Raises:
        ValidationError: If the key is longer than 512 characters or
            contains a comma
    """
    if len(key) > MAX_KEY_LENGTH:
        raise ValidationError(
            f"Key Validation Error: {key} cannot be larger than {MAX_KEY_LENGTH} characters."
        )

    if "," in key:
        raise ValidationError(f"Key Validation Error: {key} cannot contain commas.")
