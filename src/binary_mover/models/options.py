"""Conversion options, one variant per conversion mode."""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Union
from ..types import Mode, UnknownModeError
from .binary_payload import DEFAULT_MIME_TYPE

DEFAULT_KEY = "data"
DEFAULT_ENCODING = "utf8"


def _check_key(name: str, value: Any) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} cannot be empty")
    if any(segment == "" for segment in value.split(".")):
        raise ValueError(f"{name} contains an empty path segment: '{value}'")


@dataclass
class BinaryToStructuredOptions:
    """
    Options for moving a binary payload into the structured side.

    ``destination_key`` and ``json_parse`` only apply when ``set_all_data``
    is False; with ``set_all_data`` the decoded text always gets parsed and
    replaces the whole structured value.
    """

    mode: ClassVar[Mode] = Mode.BINARY_TO_STRUCTURED

    set_all_data: bool = True
    source_key: str = DEFAULT_KEY
    destination_key: str = DEFAULT_KEY
    encoding: str = DEFAULT_ENCODING
    json_parse: bool = False
    keep_source: bool = False

    def __post_init__(self):
        """Validate options after initialization."""
        _check_key("source_key", self.source_key)
        if not self.set_all_data:
            _check_key("destination_key", self.destination_key)
        if not self.encoding:
            raise ValueError("encoding cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "setAllData": self.set_all_data,
            "sourceKey": self.source_key,
            "destinationKey": self.destination_key,
            "encoding": self.encoding,
            "jsonParse": self.json_parse,
            "keepSource": self.keep_source
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BinaryToStructuredOptions':
        return cls(
            set_all_data=data.get("setAllData", True),
            source_key=data.get("sourceKey", DEFAULT_KEY),
            destination_key=data.get("destinationKey", DEFAULT_KEY),
            encoding=data.get("encoding") or DEFAULT_ENCODING,
            json_parse=data.get("jsonParse", False),
            keep_source=data.get("keepSource", False)
        )


@dataclass
class StructuredToBinaryOptions:
    """
    Options for moving structured data into a binary payload.

    ``source_key`` only applies when ``convert_all_data`` is False.
    """

    mode: ClassVar[Mode] = Mode.STRUCTURED_TO_BINARY

    convert_all_data: bool = True
    source_key: str = DEFAULT_KEY
    destination_key: str = DEFAULT_KEY
    use_raw_data: bool = False
    mime_type: str = DEFAULT_MIME_TYPE
    keep_source: bool = False

    def __post_init__(self):
        """Validate options after initialization."""
        if not self.convert_all_data:
            _check_key("source_key", self.source_key)
        _check_key("destination_key", self.destination_key)
        if not self.mime_type:
            raise ValueError("mime_type cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "convertAllData": self.convert_all_data,
            "sourceKey": self.source_key,
            "destinationKey": self.destination_key,
            "useRawData": self.use_raw_data,
            "mimeType": self.mime_type,
            "keepSource": self.keep_source
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StructuredToBinaryOptions':
        return cls(
            convert_all_data=data.get("convertAllData", True),
            source_key=data.get("sourceKey", DEFAULT_KEY),
            destination_key=data.get("destinationKey", DEFAULT_KEY),
            use_raw_data=data.get("useRawData", False),
            mime_type=data.get("mimeType") or DEFAULT_MIME_TYPE,
            keep_source=data.get("keepSource", False)
        )


ConversionOptions = Union[BinaryToStructuredOptions, StructuredToBinaryOptions]

_OPTIONS_BY_MODE = {
    Mode.BINARY_TO_STRUCTURED: BinaryToStructuredOptions,
    Mode.STRUCTURED_TO_BINARY: StructuredToBinaryOptions,
}


def resolve_mode(mode: Union[Mode, str]) -> Mode:
    """
    Resolve a mode given as enum member or host option value.

    Raises:
        UnknownModeError: If the value names neither direction
    """
    if isinstance(mode, Mode):
        return mode
    try:
        return Mode(mode)
    except ValueError:
        raise UnknownModeError(mode)


def resolve_options(mode: Union[Mode, str],
                    parameters: Optional[Dict[str, Any]] = None) -> ConversionOptions:
    """
    Build the options variant for a mode from host-style parameters.

    Args:
        mode: Mode member or its string value ("binaryToJson"/"jsonToBinary")
        parameters: camelCase option values; missing ones take defaults

    Returns:
        BinaryToStructuredOptions or StructuredToBinaryOptions

    Raises:
        UnknownModeError: If the mode is not recognised
        ValueError: If an option value is invalid
    """
    resolved = resolve_mode(mode)
    return _OPTIONS_BY_MODE[resolved].from_dict(parameters or {})
