"""Data models for the Binary Mover."""

from .binary_payload import BinaryPayload, DEFAULT_MIME_TYPE
from .record import Record
from .options import (
    BinaryToStructuredOptions,
    StructuredToBinaryOptions,
    ConversionOptions,
    resolve_mode,
    resolve_options,
)

__all__ = [
    "BinaryPayload",
    "DEFAULT_MIME_TYPE",
    "Record",
    "BinaryToStructuredOptions",
    "StructuredToBinaryOptions",
    "ConversionOptions",
    "resolve_mode",
    "resolve_options",
]
