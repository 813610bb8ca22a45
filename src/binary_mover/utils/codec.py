"""Byte, text and JSON encoding helpers."""

import base64
import binascii
import codecs
import json
from typing import Any, Union
from ..types import EncodingFailureError, ParseFailureError, UnsupportedValueError

# Host runtime encoding names that Python spells differently
ENCODING_ALIASES = {
    "utf8": "utf-8",
    "utf-8": "utf-8",
    "utf16le": "utf-16-le",
    "utf-16le": "utf-16-le",
    "ucs2": "utf-16-le",
    "ucs-2": "utf-16-le",
    "latin1": "latin-1",
    "binary": "latin-1",
    "ascii": "ascii",
}

# Encodings that render bytes as text rather than decode them
TEXT_TRANSFORMS = ("base64", "hex")


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are accepted by the json module but are not JSON
    raise ParseFailureError(f"JSON parsing failed: invalid constant '{name}'")


class CodecUtils:
    """Utility class for the byte/text/JSON conversions of a move."""

    @staticmethod
    def encode_base64(raw: bytes) -> str:
        """Base64-encode bytes to ASCII text."""
        return base64.b64encode(raw).decode("ascii")

    @staticmethod
    def decode_base64(text: str) -> bytes:
        """
        Decode base64 text to bytes.

        Raises:
            EncodingFailureError: If the text is not valid base64
        """
        try:
            return base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError, TypeError) as e:
            raise EncodingFailureError(f"Invalid base64 data: {e}")

    @staticmethod
    def normalize_encoding(name: str) -> str:
        """
        Map an encoding name to the codec name Python knows it by.

        Raises:
            EncodingFailureError: If no codec exists for the name
        """
        key = name.strip().lower()
        if key in TEXT_TRANSFORMS:
            return key
        if key in ENCODING_ALIASES:
            return ENCODING_ALIASES[key]
        try:
            info = codecs.lookup(key)
        except LookupError:
            raise EncodingFailureError(f"Unknown encoding: '{name}'", context={"encoding": name})
        # bytes-to-bytes codecs such as zlib or rot13 cannot produce text
        if not getattr(info, "_is_text_encoding", True):
            raise EncodingFailureError(f"Not a text encoding: '{name}'", context={"encoding": name})
        return info.name

    @staticmethod
    def bytes_to_text(raw: bytes, encoding: str) -> str:
        """
        Decode bytes to text using a named encoding.

        Raises:
            EncodingFailureError: For unknown encodings or invalid sequences
        """
        codec = CodecUtils.normalize_encoding(encoding)
        if codec == "base64":
            return base64.b64encode(raw).decode("ascii")
        if codec == "hex":
            return raw.hex()

        try:
            return raw.decode(codec)
        except UnicodeDecodeError as e:
            raise EncodingFailureError(
                f"Cannot decode data as {encoding}: {e.reason} at byte {e.start}",
                context={"encoding": encoding, "position": e.start}
            )
        except LookupError as e:
            raise EncodingFailureError(f"Cannot decode data as {encoding}: {e}",
                                       context={"encoding": encoding})

    @staticmethod
    def text_to_bytes(value: Union[str, bytes, bytearray]) -> bytes:
        """
        Turn a text or byte value into bytes (text is UTF-8 encoded).

        Raises:
            EncodingFailureError: If the value is not byte-representable
        """
        if isinstance(value, str):
            try:
                return value.encode("utf-8")
            except UnicodeEncodeError as e:
                raise EncodingFailureError(
                    f"Cannot encode text as utf-8: {e.reason} at position {e.start}",
                    context={"position": e.start}
                )
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        raise EncodingFailureError(
            f"Raw data must be a string or bytes, got {type(value).__name__}"
        )

    @staticmethod
    def to_json_text(value: Any) -> str:
        """
        Serialize a value to compact JSON text.

        Raises:
            UnsupportedValueError: If the value is not JSON serializable
        """
        try:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"),
                              allow_nan=False)
        except (TypeError, ValueError) as e:
            raise UnsupportedValueError(f"Data is not JSON serializable: {e}")

    @staticmethod
    def parse_json_text(text: str) -> Any:
        """
        Parse JSON text.

        Raises:
            ParseFailureError: If the text is not valid JSON
        """
        try:
            return json.loads(text, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise ParseFailureError(
                f"JSON parsing failed: {e.msg} at line {e.lineno}, column {e.colno}",
                lineno=e.lineno,
                colno=e.colno
            )
