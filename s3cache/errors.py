"""Exception types raised by the cache core.

Components raise these typed errors and chain the underlying cause with
``raise ... from e``. Only the command layer turns them into warnings or
job failures:

- ValidationError: malformed key or empty path list (warning)
- CacheTransferError: archiver or storage failure (warning)
- CacheEntryNotFoundError: entry gone by download time (the orchestrator
  treats it as absent)
- ConfigurationError: missing storage settings (job failure)
- InputRequiredError: required action input not supplied
"""
from __future__ import annotations


class CacheError(Exception):
    """Base class for all cache errors."""


class ValidationError(CacheError):
    """Raised when a cache key or path list is malformed."""


class CacheTransferError(CacheError):
    """Raised when archiving, uploading or downloading fails.

    Wraps subprocess, I/O and storage client errors so callers only have to
    catch one type. The original exception is kept in ``__cause__``.
    """


class CacheEntryNotFoundError(CacheTransferError):
    """Raised when a download finds no entry under the requested key."""


class ConfigurationError(CacheError):
    """Raised when required storage configuration is missing."""


class InputRequiredError(CacheError):
    """Raised when a required action input is empty or absent."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Input required and not supplied: {name}")
