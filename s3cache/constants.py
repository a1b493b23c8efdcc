"""Names shared between the host context, the commands and the cache core."""
from __future__ import annotations

from enum import Enum


class CompressionMethod(Enum):
    """Archive formats understood by the archiver."""

    SEVEN_ZIP = "Sz"


# Archive filename per compression method
CACHE_FILENAMES = {
    CompressionMethod.SEVEN_ZIP: "cache.7z",
}

MAX_KEY_LENGTH = 512
CACHE_SIZE_LIMIT = 5 * 1024 * 1024 * 1024  # 5GB per entry (single PUT ceiling)


class Inputs:
    """Action inputs."""

    KEY = "key"
    PATH = "path"
    RESTORE_KEYS = "restore-keys"
    UPLOAD_CHUNK_SIZE = "upload-chunk-size"


class Outputs:
    """Action outputs."""

    CACHE_HIT = "cache-hit"


class State:
    """Step state persisted between the restore and save steps."""

    CACHE_PRIMARY_KEY = "CACHE_KEY"
    CACHE_MATCHED_KEY = "CACHE_RESULT"


class Events:
    """Environment variables describing the triggering event."""

    KEY = "GITHUB_EVENT_NAME"
    REF = "GITHUB_REF"


class StorageRefs:
    """(input name, environment variable) pairs for storage settings."""

    ACCESS_KEY = ("aws-access-key-id", "AWS_ACCESS_KEY_ID")
    SECRET_KEY = ("aws-secret-access-key", "AWS_SECRET_ACCESS_KEY")
    REGION = ("aws-default-region", "AWS_DEFAULT_REGION")
    BUCKET = ("aws-default-bucket", "AWS_DEFAULT_BUCKET")
    ENDPOINT_URL = ("aws-endpoint-url", "AWS_ENDPOINT_URL")
