"""Validation utilities for options and record documents."""

import json
from typing import Any, List, Tuple
from ..types import ValidationResult, ValidationError, ErrorType, EncodingFailureError
from ..models import (
    Record,
    BinaryToStructuredOptions,
    StructuredToBinaryOptions,
    ConversionOptions,
)
from .codec import CodecUtils


class ValidationUtils:
    """Utility class for validating conversion inputs."""

    @staticmethod
    def validate_path(path: Any, location: str) -> List[ValidationError]:
        """Check a dot path for emptiness and empty segments."""
        if not isinstance(path, str) or not path:
            return [ValidationError(
                type=ErrorType.OPTIONS,
                message=f"{location} cannot be empty",
                location=location
            )]

        if any(segment == "" for segment in path.split(".")):
            return [ValidationError(
                type=ErrorType.OPTIONS,
                message=f"{location} contains an empty path segment: '{path}'",
                location=location
            )]

        return []

    @staticmethod
    def validate_options(options: ConversionOptions) -> ValidationResult:
        """
        Validate a resolved options variant.

        Encoding names are only reported as warnings; the codec lookup at
        conversion time is authoritative.

        Args:
            options: Options to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if isinstance(options, BinaryToStructuredOptions):
            errors.extend(ValidationUtils.validate_path(options.source_key, "sourceKey"))
            if not options.set_all_data:
                errors.extend(ValidationUtils.validate_path(options.destination_key, "destinationKey"))
            elif options.json_parse:
                warnings.append("jsonParse has no effect when setAllData is enabled")

            try:
                CodecUtils.normalize_encoding(options.encoding)
            except EncodingFailureError as e:
                warnings.append(str(e))

        elif isinstance(options, StructuredToBinaryOptions):
            if not options.convert_all_data:
                errors.extend(ValidationUtils.validate_path(options.source_key, "sourceKey"))
            errors.extend(ValidationUtils.validate_path(options.destination_key, "destinationKey"))

            if not options.mime_type:
                errors.append(ValidationError(
                    type=ErrorType.OPTIONS,
                    message="mimeType cannot be empty",
                    location="mimeType"
                ))

        else:
            errors.append(ValidationError(
                type=ErrorType.MODE,
                message=f"Unsupported options type: {type(options).__name__}",
                location="options"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def validate_records_document(document: str) -> ValidationResult:
        """
        Validate a JSON document holding a list of records in wire form.

        Args:
            document: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors, warnings = [], []

        if not document.strip():
            errors.append(ValidationError(
                type=ErrorType.PARSE,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(document)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.PARSE,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        record_errors, record_warnings = ValidationUtils._validate_records(data)
        errors.extend(record_errors)
        warnings.extend(record_warnings)

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _validate_records(data: Any) -> Tuple[List[ValidationError], List[str]]:
        errors = []
        warnings = []

        if not isinstance(data, list):
            errors.append(ValidationError(
                type=ErrorType.VALUE,
                message=f"Root element must be a list of records, got {type(data).__name__}",
                location="root"
            ))
            return errors, warnings

        if not data:
            warnings.append("Record list is empty")

        for index, item in enumerate(data):
            try:
                Record.from_dict(item)
            except (ValueError, KeyError) as e:
                errors.append(ValidationError(
                    type=ErrorType.PAYLOAD,
                    message=f"Invalid record: {e}",
                    location=f"[{index}]"
                ))

        return errors, warnings
