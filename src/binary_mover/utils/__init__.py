"""Utility functions for the Binary Mover."""

from .paths import PathUtils, MISSING
from .codec import CodecUtils
from .validation import ValidationUtils

__all__ = ["PathUtils", "MISSING", "CodecUtils", "ValidationUtils"]
