"""Converter moving data between the binary and structured sides of records."""

import logging
from typing import Any, Dict, Iterable, Optional, Union
from .types import (
    Mode,
    BatchResult,
    ConversionError,
    InvalidPayloadError,
    RecordConversionError,
)
from .models import (
    BinaryPayload,
    Record,
    BinaryToStructuredOptions,
    StructuredToBinaryOptions,
    ConversionOptions,
    resolve_options,
)
from .utils.paths import PathUtils, MISSING
from .utils.codec import CodecUtils
from .error_handler import ErrorHandler
from .profiler import PerformanceProfiler


class Converter:
    """
    Bidirectional converter between binary payloads and structured data.

    ``convert`` handles a single record and returns None when the record has
    nothing at the source location. ``convert_batch`` resolves options once
    and maps ``convert`` over a batch, keeping input order.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 profiler: Optional[PerformanceProfiler] = None):
        """
        Initialize the converter.

        Args:
            logger: Optional logger instance
            profiler: Optional profiler; one is created when omitted
        """
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = ErrorHandler(self.logger)
        self.profiler = profiler or PerformanceProfiler(self.logger)

    def convert(self, record: Record, options: ConversionOptions) -> Optional[Record]:
        """
        Convert one record. The input record is never mutated.

        Args:
            record: Record to convert
            options: Resolved options for the conversion direction

        Returns:
            The new record, or None if the source location is empty

        Raises:
            ConversionError: If decoding, parsing or serialization fails
        """
        if isinstance(options, BinaryToStructuredOptions):
            return self._binary_to_structured(record, options)
        if isinstance(options, StructuredToBinaryOptions):
            return self._structured_to_binary(record, options)
        raise TypeError(f"Unsupported options type: {type(options).__name__}")

    def convert_batch(self, records: Iterable[Record],
                      mode: Union[Mode, str, ConversionOptions],
                      parameters: Optional[Dict[str, Any]] = None,
                      halt_on_error: bool = True) -> BatchResult:
        """
        Convert a batch of records.

        Args:
            records: Input records, in order
            mode: Mode (member or host value), or an already-built options variant
            parameters: Host-style option values, used when ``mode`` is not options
            halt_on_error: Raise on the first failing record instead of collecting

        Returns:
            BatchResult with converted records, drop count and record errors

        Raises:
            UnknownModeError: If the mode is not recognised
            ValueError: If an option value is invalid
            RecordConversionError: On a record failure when ``halt_on_error``
        """
        if isinstance(mode, (BinaryToStructuredOptions, StructuredToBinaryOptions)):
            options = mode
        else:
            options = resolve_options(mode, parameters)

        validation = self.error_handler.validate_options(options)
        if not validation.is_valid:
            raise ValueError("; ".join(error.message for error in validation.errors))

        records = list(records)
        result = BatchResult(records=[])

        self.logger.info(f"Starting {options.mode.value} conversion of {len(records)} records")

        with self.profiler.profile_operation(options.mode.value, len(records)) as profile:
            for index, record in enumerate(records):
                try:
                    converted = self.convert(record, options)
                except ConversionError as e:
                    if halt_on_error:
                        self.logger.error(f"Record {index} failed, halting batch: {e}")
                        raise RecordConversionError(index, e) from e
                    result.errors.append(self.error_handler.handle_conversion_error(e, index))
                    continue

                if converted is None:
                    self.logger.debug(f"Record {index} has no data at the source location, dropping")
                    result.dropped_count += 1
                    continue

                result.records.append(converted)

            profile.sample_performance()
            profile.records_out = len(result.records)

        self.logger.info(
            f"Finished {options.mode.value} conversion: {len(result.records)} converted, "
            f"{result.dropped_count} dropped, {len(result.errors)} failed"
        )
        return result

    def _binary_to_structured(self, record: Record,
                              options: BinaryToStructuredOptions) -> Optional[Record]:
        if record.binary is None:
            return None

        payload = PathUtils.get(record.binary, options.source_key)
        if payload is MISSING:
            return None
        if not isinstance(payload, BinaryPayload):
            raise InvalidPayloadError(
                f"Binary key '{options.source_key}' does not hold a payload",
                context={"path": options.source_key}
            )

        raw = CodecUtils.decode_base64(payload.data)
        text = CodecUtils.bytes_to_text(raw, options.encoding)

        if options.set_all_data:
            structured = CodecUtils.parse_json_text(text)
        else:
            structured = PathUtils.clone(record.structured)
            value = CodecUtils.parse_json_text(text) if options.json_parse else text
            PathUtils.set(structured, options.destination_key, value)

        if options.keep_source:
            # Binary side is untouched so it is shared
            binary = record.binary
        else:
            binary = PathUtils.clone(record.binary)
            PathUtils.unset(binary, options.source_key)

        return Record(structured=structured, binary=binary)

    def _structured_to_binary(self, record: Record,
                              options: StructuredToBinaryOptions) -> Optional[Record]:
        if options.convert_all_data:
            value = record.structured
        else:
            value = PathUtils.get(record.structured, options.source_key)

        if value is MISSING:
            return None

        if options.use_raw_data:
            raw = CodecUtils.text_to_bytes(value)
        else:
            raw = CodecUtils.text_to_bytes(CodecUtils.to_json_text(value))

        payload = BinaryPayload(
            data=CodecUtils.encode_base64(raw),
            mime_type=options.mime_type
        )

        binary = PathUtils.clone(record.binary) if record.binary is not None else {}
        PathUtils.set(binary, options.destination_key, payload)

        if options.keep_source:
            # Structured side is untouched so it is shared
            structured = record.structured
        elif options.convert_all_data:
            structured = {}
        else:
            structured = PathUtils.clone(record.structured)
            PathUtils.unset(structured, options.source_key)

        return Record(structured=structured, binary=binary)
