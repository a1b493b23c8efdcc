"""S3-backed build cache for CI jobs."""

__version__ = "1.0.0"
