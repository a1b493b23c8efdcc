"""Blob store backends for cache archives.

Components:
    - BlobStore: Abstract interface (exists, upload, download)
    - S3BlobStore: S3-compatible bucket via boto3
    - InMemoryBlobStore: Dict-backed store for tests and dry runs
"""

from .base import BlobStore
from .memory import InMemoryBlobStore
from .s3 import S3BlobStore

__all__ = [
    "BlobStore",          # Abstract base class for storage backends
    "InMemoryBlobStore",  # Dict-backed backend
    "S3BlobStore",        # S3 bucket backend
]
