"""Cache save and restore orchestration.

Architecture:
    CacheOrchestrator
    ├── validation (key and path checks, before anything else runs)
    ├── paths.resolve_paths (patterns -> workspace-relative path set)
    ├── Archiver (create / extract / list one archive file)
    └── BlobStore (exists / upload / download by key)

Restore states:
    Validating -> CheckingExistence -> Miss
                                    -> Downloading -> Extracting -> CleaningUp -> Hit

Save steps:
    Validating -> Resolving -> Archiving -> SizeCheck -> Checksum -> Uploading

Expected branches (miss, already cached, size limit, nothing matched) are
returned as ``CacheOutcome`` values. Exceptions are reserved for
validation, transfer and configuration failures. Every call works inside
its own temporary directory, which is removed on all exit paths.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..config import Config, StorageConfig
from ..constants import CACHE_SIZE_LIMIT, CompressionMethod
from ..errors import CacheEntryNotFoundError, CacheTransferError
from ..services.archiver import Archiver, SevenZipArchiver
from ..storage.base import BlobStore
from ..storage.s3 import S3BlobStore
from ..utils.secure_temp import secure_temp_directory
from .paths import resolve_paths
from .utils import (
    format_limit,
    format_size,
    get_archive_size,
    get_cache_filename,
    get_checksum,
    get_compression_method,
    is_exact_key_match,
)
from .validation import validate_key, validate_paths

logger = logging.getLogger(__name__)


class CacheOutcome(Enum):
    """Result of a save or restore call."""

    HIT = "hit"  # Entry found and extracted
    MISS = "miss"  # No candidate key stored
    SAVED = "saved"  # Archive uploaded
    ALREADY_CACHED = "already_cached"  # Primary key was restored earlier in the job
    SIZE_LIMIT_EXCEEDED = "size_limit_exceeded"  # Archive too large, not uploaded
    NOTHING_TO_SAVE = "nothing_to_save"  # Patterns matched no files


@dataclass
class RestoreResult:
    """Outcome of a restore call.

    Attributes:
        outcome: HIT or MISS
        primary_key: Key that was requested first
        key: Key that matched, None on a miss
        archive_size: Downloaded archive size in bytes, None on a miss
    """

    outcome: CacheOutcome
    primary_key: str
    key: Optional[str] = None
    archive_size: Optional[int] = None

    @property
    def is_hit(self) -> bool:
        return self.outcome is CacheOutcome.HIT

    @property
    def exact_match(self) -> bool:
        """Whether the primary key itself matched (not a restore key)."""
        return is_exact_key_match(self.primary_key, self.key)


@dataclass
class SaveResult:
    """Outcome of a save call.

    Attributes:
        outcome: SAVED, ALREADY_CACHED, SIZE_LIMIT_EXCEEDED or NOTHING_TO_SAVE
        key: Key the archive was (or would have been) stored under
        archive_size: Archive size in bytes when an archive was built
        message: Human-readable description for the job log
    """

    outcome: CacheOutcome
    key: str
    archive_size: Optional[int] = None
    message: str = ""

    @property
    def is_saved(self) -> bool:
        return self.outcome is CacheOutcome.SAVED


@dataclass
class SaveOptions:
    """Upload tuning options.

    ``upload_chunk_size`` is accepted for compatibility with the action
    inputs; archives are uploaded with a single PUT.
    """

    upload_chunk_size: Optional[int] = None


class CacheOrchestrator:
    """Runs the save and restore pipelines over an archiver and a blob store."""

    def __init__(
        self,
        archiver: Archiver,
        blob_store: BlobStore,
        workspace: Path,
        temp_dir: Optional[Path] = None,
        debug: bool = False,
        verify_checksum: bool = True,
        size_limit: int = CACHE_SIZE_LIMIT,
        compression_method: Optional[CompressionMethod] = None,
    ):
        """Initialize the orchestrator.

        Args:
            archiver: Builds and extracts archives
            blob_store: Stores archives by key
            workspace: Root that cache paths are relative to
            temp_dir: Parent for per-call temporary directories
            debug: List archive contents in the log
            verify_checksum: Compare downloaded archives with the stored checksum
            size_limit: Largest archive in bytes that will be uploaded
            compression_method: Archive format (defaults to the current method)
        """
        self.archiver = archiver
        self.blob_store = blob_store
        self.workspace = Path(workspace)
        self.temp_dir = temp_dir
        self.debug = debug
        self.verify_checksum = verify_checksum
        self.size_limit = size_limit
        self.compression_method = compression_method or get_compression_method()

    @classmethod
    def from_config(cls, config: Config, storage_config: StorageConfig) -> "CacheOrchestrator":
        """Build the production orchestrator (7-Zip + S3).

        Args:
            config: Runner configuration
            storage_config: Resolved bucket settings

        Returns:
            CacheOrchestrator instance
        """
        return cls(
            archiver=SevenZipArchiver.from_config(config),
            blob_store=S3BlobStore.from_config(storage_config, config),
            workspace=config.workspace,
            temp_dir=config.temp_dir,
            debug=config.debug,
            verify_checksum=config.verify_checksum,
        )

    # ------------------------------------------------------------------ restore

    def restore(
        self,
        paths: Sequence[str],
        primary_key: str,
        restore_keys: Optional[Sequence[str]] = None,
    ) -> RestoreResult:
        """Restore the first stored entry among the candidate keys.

        Candidates are the primary key followed by the restore keys, checked
        in order for an exact stored entry.

        Args:
            paths: Path patterns (validated only; archive entries carry their paths)
            primary_key: Preferred cache key
            restore_keys: Ordered fallback keys

        Returns:
            RestoreResult with HIT and the matched key, or MISS

        Raises:
            ValidationError: If paths are empty or any key is malformed
            CacheTransferError: If download, verification or extraction fails
        """
        validate_paths(paths)

        candidates = self._candidate_keys(primary_key, restore_keys)
        logger.debug("Resolved Keys:")
        logger.debug(json.dumps(candidates))
        for key in candidates:
            validate_key(key)

        matched_key, data = self._fetch_first(candidates)
        if matched_key is None:
            return RestoreResult(outcome=CacheOutcome.MISS, primary_key=primary_key)

        with secure_temp_directory(dir=self.temp_dir) as archive_dir:
            archive_path = archive_dir / get_cache_filename(self.compression_method)
            logger.debug(f"Archive Path: {archive_path}")

            try:
                self._write_archive(archive_path, data)
                self._verify_archive(matched_key, archive_path)

                if self.debug:
                    logger.debug(self.archiver.list(archive_path))

                archive_size = get_archive_size(archive_path)
                logger.info(f"Cache Size: {format_size(archive_size)}")

                self.archiver.extract(archive_path)
                logger.info("Cache restored successfully")
            finally:
                # Try to delete the archive to save space
                try:
                    archive_path.unlink(missing_ok=True)
                except OSError as e:
                    logger.debug(f"Failed to delete archive: {e}")

        return RestoreResult(
            outcome=CacheOutcome.HIT,
            primary_key=primary_key,
            key=matched_key,
            archive_size=archive_size,
        )

    def _fetch_first(self, candidates: Sequence[str]) -> Tuple[Optional[str], bytes]:
        """Download the first candidate that is stored.

        An entry removed between the lookup and the download counts as
        absent, and the next candidate is tried.
        """
        for key in candidates:
            if not self.blob_store.exists(key):
                continue
            try:
                return key, self.blob_store.download(key)
            except CacheEntryNotFoundError:
                logger.debug(f"Cache entry {key} was removed before download")
        return None, b""

    @staticmethod
    def _candidate_keys(primary_key: str, restore_keys: Optional[Sequence[str]]) -> List[str]:
        # Ordered, duplicates dropped
        return list(dict.fromkeys([primary_key, *(restore_keys or [])]))

    @staticmethod
    def _write_archive(archive_path: Path, data: bytes) -> None:
        try:
            archive_path.write_bytes(data)
        except OSError as e:
            raise CacheTransferError(f"Failed to write downloaded archive: {e}") from e

    def _verify_archive(self, key: str, archive_path: Path) -> None:
        """Compare the downloaded archive with the checksum stored at upload.

        Entries uploaded without a checksum are accepted as-is.

        Raises:
            CacheTransferError: On mismatch
        """
        if not self.verify_checksum:
            return

        expected = self.blob_store.stored_checksum(key)
        if not expected:
            logger.debug(f"No stored checksum for {key}, skipping verification")
            return

        actual = get_checksum(archive_path)
        if actual != expected:
            raise CacheTransferError(
                f"Checksum mismatch for cache entry {key}: expected {expected}, got {actual}"
            )

    # --------------------------------------------------------------------- save

    def save(
        self,
        paths: Sequence[str],
        key: str,
        matched_key: Optional[str] = None,
        options: Optional[SaveOptions] = None,
    ) -> SaveResult:
        """Archive the matched paths and upload them under ``key``.

        Args:
            paths: Path patterns to cache
            key: Cache key to store under
            matched_key: Key restored earlier in the job, if any
            options: Upload options

        Returns:
            SaveResult describing what happened

        Raises:
            ValidationError: If paths are empty or the key is malformed
            CacheTransferError: If archiving or uploading fails
        """
        validate_paths(paths)
        validate_key(key)

        if is_exact_key_match(key, matched_key):
            return SaveResult(
                outcome=CacheOutcome.ALREADY_CACHED,
                key=key,
                message=f"Cache hit occurred on the primary key {key}, not saving cache.",
            )

        if options and options.upload_chunk_size is not None:
            logger.debug(f"Upload chunk size {options.upload_chunk_size} ignored, using a single PUT")

        cache_paths = resolve_paths(paths, self.workspace)
        logger.debug("Cache Paths:")
        logger.debug(json.dumps(cache_paths))

        if not cache_paths:
            return SaveResult(
                outcome=CacheOutcome.NOTHING_TO_SAVE,
                key=key,
                message=(
                    f"No files were found with the provided path: {', '.join(paths)}. "
                    "No cache will be saved."
                ),
            )

        with secure_temp_directory(dir=self.temp_dir) as archive_dir:
            archive_path = self.archiver.create(archive_dir, cache_paths)
            logger.debug(f"Archive Path: {archive_path}")

            if self.debug:
                logger.debug(self.archiver.list(archive_path))

            archive_size = get_archive_size(archive_path)
            logger.debug(f"File Size: {archive_size}")

            if archive_size > self.size_limit:
                limit = format_limit(self.size_limit)
                return SaveResult(
                    outcome=CacheOutcome.SIZE_LIMIT_EXCEEDED,
                    key=key,
                    archive_size=archive_size,
                    message=(
                        f"Cache size of {format_size(archive_size)} is over the "
                        f"{limit} limit, not saving cache."
                    ),
                )

            checksum = get_checksum(archive_path)
            logger.debug(f"Saving Cache (ID: {key})")
            self.blob_store.upload(key, archive_path, checksum)

        return SaveResult(
            outcome=CacheOutcome.SAVED,
            key=key,
            archive_size=archive_size,
            message=f"Cache saved with key: {key}",
        )
