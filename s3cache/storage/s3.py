"""S3 blob store.

Uses three object operations against one bucket:

- HEAD to check existence (and read the stored checksum)
- GET to download an archive into memory
- PUT with a Content-MD5 header to upload an archive

A single PUT accepts objects up to 5GB, which is also the cache size limit.
No retry or backoff is layered on top of the client; connect and read
timeouts bound every call.
"""
from __future__ import annotations

import logging
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar, Union

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..config import Config, StorageConfig
from ..errors import CacheEntryNotFoundError, CacheTransferError
from .base import BlobStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}
CHECKSUM_METADATA_KEY = "content-md5"


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


def handle_storage_errors(operation_name: str) -> Callable:
    """Decorator that re-raises S3 client failures as CacheTransferError.

    The wrapped method must take the cache key as its first argument.
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(self: "S3BlobStore", key: str, *args: Any, **kwargs: Any) -> T:
            try:
                return func(self, key, *args, **kwargs)
            except ClientError as e:
                if _error_code(e) in NOT_FOUND_CODES:
                    raise CacheEntryNotFoundError(f"Cache entry not found for key: {key}") from e
                raise CacheTransferError(f"{operation_name} failed for key {key}: {e}") from e
            except BotoCoreError as e:
                raise CacheTransferError(f"{operation_name} failed for key {key}: {e}") from e
            except OSError as e:
                raise CacheTransferError(f"System error during {operation_name}: {e}") from e
        return wrapper
    return decorator


class S3BlobStore(BlobStore):
    """Blob store backed by an S3-compatible bucket."""

    def __init__(
        self,
        storage_config: StorageConfig,
        client: Optional[Any] = None,
        connect_timeout: int = 10,
        read_timeout: int = 300,
    ):
        """Initialize the store.

        Args:
            storage_config: Bucket and credentials
            client: Pre-built S3 client (a boto3 client is created if None)
            connect_timeout: Seconds to wait for a connection
            read_timeout: Seconds to wait for a response
        """
        self.bucket = storage_config.bucket
        if client is None:
            # Empty values fall back to boto3's own credential and region lookup
            client = boto3.client(
                "s3",
                aws_access_key_id=storage_config.access_key_id or None,
                aws_secret_access_key=storage_config.secret_access_key or None,
                region_name=storage_config.region or None,
                endpoint_url=storage_config.endpoint_url or None,
                config=BotoConfig(connect_timeout=connect_timeout, read_timeout=read_timeout),
            )
        self._client = client

        logger.debug(f"Initialized S3BlobStore for bucket '{self.bucket}'")

    @classmethod
    def from_config(cls, storage_config: StorageConfig, config: Config) -> "S3BlobStore":
        """Create a store using the timeouts from runner configuration."""
        return cls(
            storage_config,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
        )

    def _head(self, key: str) -> Optional[dict]:
        try:
            return self._client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                return None
            raise

    @handle_storage_errors("Cache lookup")
    def exists(self, key: str) -> bool:
        return self._head(key) is not None

    @handle_storage_errors("Cache lookup")
    def stored_checksum(self, key: str) -> Optional[str]:
        response = self._head(key)
        if response is None:
            return None
        return response.get("Metadata", {}).get(CHECKSUM_METADATA_KEY)

    @handle_storage_errors("Cache upload")
    def upload(self, key: str, file_path: Union[str, Path], checksum: str) -> None:
        with open(file_path, "rb") as body:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentMD5=checksum,
                Metadata={CHECKSUM_METADATA_KEY: checksum},
            )
        logger.debug(f"Uploaded {file_path} to s3://{self.bucket}/{key}")

    @handle_storage_errors("Cache download")
    def download(self, key: str) -> bytes:
        response = self._client.get_object(Bucket=self.bucket, Key=key)
        body = response.get("Body")
        if body is None:
            raise CacheTransferError(f"S3 returned no content for key: {key}")
        return body.read()
