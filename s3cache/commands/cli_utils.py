"""Shared CLI utilities and argument parser."""
from __future__ import annotations

import argparse
import logging
from typing import Callable

from .. import __version__
from ..cache.orchestrator import CacheOrchestrator
from ..config import StorageConfig, get_config
from ..constants import Outputs
from ..host.context import HostContext

logger = logging.getLogger(__name__)

# Builds the orchestrator once inputs have been read; configuration errors surface here
OrchestratorFactory = Callable[[HostContext], CacheOrchestrator]


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration based on verbosity level.

    Args:
        verbose: If True, set to DEBUG level; otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger().setLevel(level)

    # Set specific loggers
    logging.getLogger("s3cache").setLevel(level)


def build_orchestrator(context: HostContext) -> CacheOrchestrator:
    """Default factory: 7-Zip archiver and S3 blob store from the environment."""
    config = get_config()
    logger.debug(f"Configuration: {config.to_dict()}")
    storage_config = StorageConfig.from_host(context)
    return CacheOrchestrator.from_config(config, storage_config)


def check_event(context: HostContext) -> bool:
    """Warn and return False when the event is not tied to a ref."""
    if context.is_valid_event():
        return True
    logger.warning(
        f"Event Validation Error: The event type {context.event_name()} is not "
        "supported because it's not tied to a branch or tag ref."
    )
    return False


def set_cache_hit_output(context: HostContext, is_cache_hit: bool) -> None:
    context.set_output(Outputs.CACHE_HIT, str(is_cache_hit).lower())


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="s3-build-cache",
        description="Save and restore CI build caches in an S3-compatible bucket",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Restore before the build (reads INPUT_KEY, INPUT_PATH, INPUT_RESTORE-KEYS)
  s3-build-cache restore

  # Save after the build (reads the key saved by the restore step)
  s3-build-cache save

  # With debug logging
  s3-build-cache --verbose restore

Storage settings (action input, then environment variable):
  aws-access-key-id      AWS_ACCESS_KEY_ID
  aws-secret-access-key  AWS_SECRET_ACCESS_KEY
  aws-default-region     AWS_DEFAULT_REGION
  aws-default-bucket     AWS_DEFAULT_BUCKET
  aws-endpoint-url       AWS_ENDPOINT_URL (optional)
        """,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    subparsers.add_parser(
        "restore",
        help="Restore a cache entry into the workspace",
        description=(
            "Look up the primary key, then each restore key, and extract the first "
            "stored archive into the workspace"
        ),
    )
    subparsers.add_parser(
        "save",
        help="Archive the cache paths and upload them",
        description=(
            "Archive the configured paths and upload them under the key recorded "
            "by the restore step"
        ),
    )

    return parser
