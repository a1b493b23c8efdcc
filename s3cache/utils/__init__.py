"""Utility modules for the build cache."""

from .secure_temp import secure_temp_directory

__all__ = ["secure_temp_directory"]
