"""Error handling implementation for the Binary Mover."""

import logging
from typing import Optional
from .types import (
    ValidationResult,
    ValidationError,
    RecordError,
    ConversionError,
    ErrorType
)
from .models import ConversionOptions
from .utils.validation import ValidationUtils


class ErrorHandler:
    """
    Error handler for Binary Mover operations.

    Validates options and record documents, and turns per-record
    conversion failures into RecordError entries that name the record.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, document: str) -> ValidationResult:
        """
        Validate a JSON document of records.

        Args:
            document: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_records_document(document)
        except (ValueError, KeyError, TypeError) as e:
            self.logger.error(f"Unexpected error during input validation: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.PARSE,
                    message=f"Validation failed with unexpected error: {str(e)}",
                    location="input"
                )],
                warnings=[]
            )

    def validate_options(self, options: ConversionOptions) -> ValidationResult:
        """
        Validate conversion options and log any warnings.

        Args:
            options: Resolved options variant

        Returns:
            ValidationResult with validation details
        """
        result = ValidationUtils.validate_options(options)
        for warning in result.warnings:
            self.logger.warning(f"Option warning: {warning}")
        return result

    def handle_conversion_error(self, error: ConversionError, index: int) -> RecordError:
        """
        Log a per-record failure and describe it.

        Args:
            error: Error raised while converting the record
            index: Position of the record in the input batch

        Returns:
            RecordError attributed to the record
        """
        self.logger.error(f"Conversion error in record {index}: {error.error_type.value} - {error}")
        return RecordError(
            index=index,
            error_type=error.error_type,
            message=str(error)
        )
