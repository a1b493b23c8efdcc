"""Cache save/restore core.

Components:
    Orchestration:
        - CacheOrchestrator: Runs the save and restore pipelines
        - CacheOutcome: Result variants (hit, miss, saved, ...)
        - RestoreResult / SaveResult: Per-call outcome records
        - SaveOptions: Upload options

    Helpers:
        - validate_key / validate_paths: Input validation
        - resolve_paths: Glob patterns -> workspace-relative paths

Usage:
    Restore then save within one job::

        from s3cache.cache import CacheOrchestrator

        orchestrator = CacheOrchestrator.from_config(config, storage_config)

        result = orchestrator.restore(["node_modules"], "node-test")
        if not result.is_hit:
            install_dependencies()
            orchestrator.save(["node_modules"], "node-test")
"""

from .orchestrator import (
    CacheOrchestrator,
    CacheOutcome,
    RestoreResult,
    SaveOptions,
    SaveResult,
)
from .paths import resolve_paths
from .validation import validate_key, validate_paths

__all__ = [
    "CacheOrchestrator",  # Save/restore pipelines
    "CacheOutcome",       # Result variants
    "RestoreResult",      # Restore outcome record
    "SaveOptions",        # Upload options
    "SaveResult",         # Save outcome record
    "resolve_paths",      # Glob resolution
    "validate_key",       # Key validation
    "validate_paths",     # Path list validation
]
