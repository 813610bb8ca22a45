"""Record model: a structured side plus an optional binary side."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from .binary_payload import BinaryPayload


@dataclass
class Record:
    """
    One item of a batch.

    ``structured`` holds arbitrary JSON-like data. ``binary`` is a tree of
    dicts whose leaves are BinaryPayload entries, or None when the record
    carries no binary data at all.
    """

    structured: Any = field(default_factory=dict)
    binary: Optional[Dict[str, Any]] = None

    def has_binary(self) -> bool:
        """Check whether the record carries a binary side."""
        return self.binary is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to the host pipeline's item shape."""
        result = {"json": self.structured}
        if self.binary is not None:
            result["binary"] = _binary_to_wire(self.binary)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Record':
        """Create Record from the host pipeline's item shape."""
        if not isinstance(data, dict):
            raise ValueError(f"record must be an object, got {type(data).__name__}")

        binary = data.get("binary")
        if binary is not None and not isinstance(binary, dict):
            raise ValueError("binary must be an object")

        return cls(
            structured=data.get("json", {}),
            binary=_binary_from_wire(binary) if binary is not None else None
        )


def _binary_to_wire(tree: Dict[str, Any]) -> Dict[str, Any]:
    wire = {}
    for key, value in tree.items():
        if isinstance(value, BinaryPayload):
            wire[key] = value.to_dict()
        elif isinstance(value, dict):
            wire[key] = _binary_to_wire(value)
        else:
            wire[key] = value
    return wire


def _binary_from_wire(wire: Dict[str, Any]) -> Dict[str, Any]:
    tree = {}
    for key, value in wire.items():
        if BinaryPayload.looks_like_payload(value):
            tree[key] = BinaryPayload.from_dict(value)
        elif isinstance(value, dict):
            tree[key] = _binary_from_wire(value)
        else:
            raise ValueError(f"binary entry '{key}' is not a payload")
    return tree
