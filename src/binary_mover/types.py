"""Core type definitions for the Binary Mover."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Mode(Enum):
    """Direction of a conversion."""
    BINARY_TO_STRUCTURED = "binaryToJson"
    STRUCTURED_TO_BINARY = "jsonToBinary"


class ErrorType(Enum):
    """Enumeration of error types."""
    MODE = "mode"
    SOURCE = "source"
    PARSE = "parse"
    ENCODING = "encoding"
    PAYLOAD = "payload"
    VALUE = "value"
    OPTIONS = "options"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class RecordError:
    """A conversion failure attributed to one input record."""
    index: int
    error_type: ErrorType
    message: str

    def __str__(self) -> str:
        return f"record {self.index} failed: {self.message}"


@dataclass
class BatchResult:
    """Result of converting a batch of records."""
    records: List[Any]
    dropped_count: int = 0
    errors: List[RecordError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class ConversionError(Exception):
    """Base exception for conversion errors."""

    error_type = ErrorType.VALUE

    def __init__(self, message: str, error_type: Optional[ErrorType] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        if error_type is not None:
            self.error_type = error_type
        self.context = context or {}


class UnknownModeError(ConversionError):
    """Raised when the configured mode is neither of the two directions."""

    error_type = ErrorType.MODE

    def __init__(self, mode: Any):
        super().__init__(f'The operation "{mode}" is not known!', context={"mode": mode})
        self.mode = mode


class ParseFailureError(ConversionError):
    """Raised when decoded text is not valid JSON."""

    error_type = ErrorType.PARSE

    def __init__(self, message: str, lineno: Optional[int] = None,
                 colno: Optional[int] = None):
        super().__init__(message, context={"lineno": lineno, "colno": colno})
        self.lineno = lineno
        self.colno = colno


class EncodingFailureError(ConversionError):
    """Raised for unknown encodings and undecodable byte sequences."""

    error_type = ErrorType.ENCODING


class InvalidPayloadError(ConversionError):
    """Raised when a binary path resolves to something other than a payload."""

    error_type = ErrorType.PAYLOAD


class UnsupportedValueError(ConversionError):
    """Raised for structured content outside the JSON value model."""

    error_type = ErrorType.VALUE


class RecordConversionError(Exception):
    """A per-record failure, tagged with the index of the failing record."""

    def __init__(self, index: int, cause: ConversionError):
        super().__init__(f"record {index} failed: {cause}")
        self.index = index
        self.cause = cause

    @property
    def error_type(self) -> ErrorType:
        return self.cause.error_type
