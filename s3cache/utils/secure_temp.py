"""Scoped temporary directories for archive files.

Every save and restore works inside its own directory created here, and
the directory is removed on every exit path, including failures and early
returns.
"""
from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

logger = logging.getLogger(__name__)


@contextmanager
def secure_temp_directory(
    suffix: str = "",
    prefix: str = "s3cache-",
    dir: Optional[Path] = None,
    permissions: int = 0o700,
) -> Generator[Path, None, None]:
    """Create a temporary directory with restrictive permissions.

    The name carries a random component, so concurrent runs on the same
    machine never share a directory.

    Args:
        suffix: Directory name suffix
        prefix: Directory name prefix
        dir: Parent directory (defaults to the system temp dir)
        permissions: Directory permissions in octal (default 0o700)

    Yields:
        Path to the temporary directory

    Example:
        >>> with secure_temp_directory(dir=runner_temp) as temp_dir:
        ...     archive = temp_dir / "cache.7z"
        ... # Directory and archive removed here
    """
    if dir is not None:
        Path(dir).mkdir(parents=True, exist_ok=True)
    temp_dir = Path(tempfile.mkdtemp(suffix=suffix, prefix=prefix, dir=str(dir) if dir else None))

    try:
        temp_dir.chmod(permissions)
    except OSError as e:
        logger.warning(f"Failed to set permissions on {temp_dir}: {e}")

    try:
        yield temp_dir
    finally:
        # Cleanup failures are logged, never raised
        try:
            if temp_dir.exists():
                shutil.rmtree(temp_dir)
                logger.debug(f"Cleaned up temporary directory: {temp_dir}")
        except OSError as e:
            logger.debug(f"Failed to delete temporary directory {temp_dir}: {e}")
