"""Configuration loaded once at startup and passed down explicitly.

``Config`` holds runner and tool settings read from environment variables.
``StorageConfig`` holds bucket credentials, resolved from action inputs first
and environment variables second.
"""
from __future__ import annotations

import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from ..constants import StorageRefs
from ..errors import ConfigurationError

if TYPE_CHECKING:
    from ..host.context import HostContext

logger = logging.getLogger(__name__)


def _parse_bool(value: str | bool | None) -> bool:
    """Parse boolean value from various formats."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return value.lower() in ("true", "1", "yes", "on", "enabled")


def _getenv(key: str, default: str = "") -> str:
    """Get environment variable with default."""
    return os.getenv(key, default)


def _getenv_int(key: str, default: int) -> int:
    """Get integer environment variable with validation.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Parsed integer value

    Raises:
        ValueError: If value cannot be parsed as integer
    """
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(
            f"Invalid integer value for {key}='{value}'. "
            f"Expected integer, got: {value}"
        ) from e


def _default_workspace() -> Path:
    return Path(_getenv("GITHUB_WORKSPACE") or os.getcwd())


def _default_temp_dir() -> Path:
    return Path(_getenv("RUNNER_TEMP") or tempfile.gettempdir())


def sanitize_for_logging(value: Optional[str], min_length: int = 8) -> str:
    """Mask a secret so it can be logged.

    Args:
        value: Value to sanitize
        min_length: Minimum length to show partial value

    Returns:
        Sanitized value safe for logging
    """
    if not value or len(value) < min_length:
        return "[REDACTED]"

    visible_chars = min(4, len(value) // 4)
    return f"{value[:visible_chars]}{'*' * (len(value) - 2 * visible_chars)}{value[-visible_chars:]}"


@dataclass
class Config:
    """Runner and tool configuration loaded from environment variables."""

    # ========== Paths ==========
    workspace: Path = field(default_factory=_default_workspace)
    temp_dir: Path = field(default_factory=_default_temp_dir)

    # ========== Archiver ==========
    seven_zip_binary: str = field(default_factory=lambda: _getenv("SEVEN_ZIP_BINARY", "7z"))
    archive_timeout: int = field(default_factory=lambda: _getenv_int("ARCHIVE_TIMEOUT", 3600))

    # ========== Storage ==========
    connect_timeout: int = field(default_factory=lambda: _getenv_int("CONNECT_TIMEOUT", 10))
    read_timeout: int = field(default_factory=lambda: _getenv_int("READ_TIMEOUT", 300))
    verify_checksum: bool = field(
        default_factory=lambda: _parse_bool(_getenv("CACHE_VERIFY_CHECKSUM", "true"))
    )

    # ========== Logging ==========
    debug: bool = field(default_factory=lambda: _getenv("RUNNER_DEBUG") == "1")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "workspace": str(self.workspace),
            "temp_dir": str(self.temp_dir),
            "seven_zip_binary": self.seven_zip_binary,
            "archive_timeout": self.archive_timeout,
            "connect_timeout": self.connect_timeout,
            "read_timeout": self.read_timeout,
            "verify_checksum": self.verify_checksum,
            "debug": self.debug,
        }


def _resolve_setting(
    context: "HostContext",
    input_name: str,
    env_name: str,
    environ: Mapping[str, str],
    required: bool = True,
) -> Optional[str]:
    """Resolve one storage setting, action input first.

    An empty input falls through to the environment. Only a variable that is
    not set at all counts as missing; an empty value is passed on as-is.
    """
    value = context.get_input(input_name)
    if value:
        return value

    if env_name not in environ:
        if required:
            raise ConfigurationError(f"Missing environment variable `{env_name}`")
        return None

    value = environ[env_name]
    if not value and not required:
        return None
    return value


@dataclass(frozen=True)
class StorageConfig:
    """Bucket location and credentials for the S3 blob store."""

    access_key_id: str
    secret_access_key: str
    region: str
    bucket: str
    endpoint_url: Optional[str] = None

    @classmethod
    def from_host(
        cls, context: "HostContext", environ: Optional[Mapping[str, str]] = None
    ) -> "StorageConfig":
        """Resolve storage settings from action inputs and the environment.

        Args:
            context: Host context used to read action inputs
            environ: Environment mapping (defaults to os.environ)

        Returns:
            StorageConfig instance

        Raises:
            ConfigurationError: If a required setting is missing from both
                the inputs and the environment
        """
        env = os.environ if environ is None else environ
        config = cls(
            access_key_id=_resolve_setting(context, *StorageRefs.ACCESS_KEY, env),
            secret_access_key=_resolve_setting(context, *StorageRefs.SECRET_KEY, env),
            region=_resolve_setting(context, *StorageRefs.REGION, env),
            bucket=_resolve_setting(context, *StorageRefs.BUCKET, env),
            endpoint_url=_resolve_setting(context, *StorageRefs.ENDPOINT_URL, env, required=False),
        )
        logger.debug(f"Storage configuration: {config.to_dict()}")
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with secrets masked."""
        return {
            "access_key_id": sanitize_for_logging(self.access_key_id),
            "secret_access_key": sanitize_for_logging(self.secret_access_key),
            "region": self.region,
            "bucket": self.bucket,
            "endpoint_url": self.endpoint_url,
        }


# Singleton instance with thread-safe initialization
_config_instance: Optional[Config] = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """Get global config instance (singleton pattern, thread-safe)."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            # Double-check pattern to prevent race conditions
            if _config_instance is None:
                _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Drop the cached config instance so the next call re-reads the environment."""
    global _config_instance
    with _config_lock:
        _config_instance = None


__all__ = ["Config", "StorageConfig", "get_config", "reset_config", "sanitize_for_logging"]
