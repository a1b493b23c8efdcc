"""External tool services."""

from .archiver import Archiver, SevenZipArchiver

__all__ = ["Archiver", "SevenZipArchiver"]
