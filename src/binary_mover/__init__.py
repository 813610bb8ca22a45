"""
Binary Mover - Move data between binary payloads and structured data.

Converts record batches in either direction: base64 payloads on the
binary side become JSON values on the structured side, and structured
values become base64 payloads.
"""

from .converter import Converter
from .models import (
    BinaryPayload,
    Record,
    BinaryToStructuredOptions,
    StructuredToBinaryOptions,
    resolve_options,
)
from .types import (
    Mode,
    BatchResult,
    RecordError,
    ConversionError,
    UnknownModeError,
    ParseFailureError,
    EncodingFailureError,
    InvalidPayloadError,
    UnsupportedValueError,
    RecordConversionError,
)

__version__ = "1.0.0"
__all__ = [
    "Converter",
    "BinaryPayload",
    "Record",
    "BinaryToStructuredOptions",
    "StructuredToBinaryOptions",
    "resolve_options",
    "Mode",
    "BatchResult",
    "RecordError",
    "ConversionError",
    "UnknownModeError",
    "ParseFailureError",
    "EncodingFailureError",
    "InvalidPayloadError",
    "UnsupportedValueError",
    "RecordConversionError",
]
