"""Translation of external tool failures into CacheTransferError."""
from __future__ import annotations

import logging
import subprocess
from functools import wraps
from typing import Any, Callable, TypeVar

from ..errors import CacheTransferError

logger = logging.getLogger(__name__)

T = TypeVar("T")

INSTALL_HINT = (
    "7-Zip is required but not installed. "
    "Install with: sudo apt-get install p7zip-full (Ubuntu) or "
    "brew install p7zip (macOS)"
)


def handle_tool_errors(operation_name: str = "7z operation") -> Callable:
    """Decorator that re-raises tool failures as CacheTransferError.

    Args:
        operation_name: Description of the operation for error messages

    Returns:
        Decorated function; the original exception is chained as the cause
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except subprocess.CalledProcessError as e:
                output = (e.stderr or e.stdout or "").strip() or str(e)
                logger.debug(f"{operation_name} failed with exit code {e.returncode}: {output}")
                raise CacheTransferError(f"7z failed with error: {output}") from e
            except subprocess.TimeoutExpired as e:
                raise CacheTransferError(f"{operation_name} timed out after {e.timeout}s") from e
            except FileNotFoundError as e:
                logger.debug(f"{operation_name} could not start: {e}")
                raise CacheTransferError(INSTALL_HINT) from e
            except PermissionError as e:
                raise CacheTransferError(f"Permission denied during {operation_name}: {e}") from e
            except OSError as e:
                raise CacheTransferError(f"System error during {operation_name}: {e}") from e
        return wrapper
    return decorator
