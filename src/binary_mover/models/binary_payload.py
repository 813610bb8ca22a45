"""Binary payload model."""

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_MIME_TYPE = "application/json"


@dataclass(frozen=True)
class BinaryPayload:
    """
    A byte blob stored as base64 text, labelled with a mime type.

    Payloads are immutable, so trees holding them can be cloned without
    duplicating the payloads themselves.
    """

    data: str
    mime_type: str = DEFAULT_MIME_TYPE
    file_name: Optional[str] = None
    file_extension: Optional[str] = None

    def __post_init__(self):
        """Validate payload after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.data, str):
            raise ValueError("data must be a base64 string")

        try:
            base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("data must be valid base64")

        if not self.mime_type:
            raise ValueError("mime_type cannot be empty")

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str = DEFAULT_MIME_TYPE,
                   file_name: Optional[str] = None,
                   file_extension: Optional[str] = None) -> 'BinaryPayload':
        """Create a payload by base64-encoding raw bytes."""
        return cls(
            data=base64.b64encode(raw).decode("ascii"),
            mime_type=mime_type,
            file_name=file_name,
            file_extension=file_extension
        )

    def to_bytes(self) -> bytes:
        """Decode the payload back to its original bytes."""
        return base64.b64decode(self.data, validate=True)

    @property
    def size(self) -> int:
        """Decoded size in bytes."""
        return len(self.to_bytes())

    def to_dict(self) -> Dict[str, Any]:
        """Convert payload to its wire form."""
        result = {
            "data": self.data,
            "mimeType": self.mime_type
        }
        if self.file_name is not None:
            result["fileName"] = self.file_name
        if self.file_extension is not None:
            result["fileExtension"] = self.file_extension
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BinaryPayload':
        """Create BinaryPayload from its wire form."""
        return cls(
            data=data["data"],
            mime_type=data.get("mimeType") or DEFAULT_MIME_TYPE,
            file_name=data.get("fileName"),
            file_extension=data.get("fileExtension")
        )

    @staticmethod
    def looks_like_payload(data: Any) -> bool:
        """Check whether a wire-form mapping describes a payload."""
        return (isinstance(data, dict)
                and isinstance(data.get("data"), str)
                and "mimeType" in data)
