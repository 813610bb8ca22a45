"""Pytest configuration and fixtures."""

import base64
import json
import pytest
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from binary_mover.models import BinaryPayload, Record


def payload_for(value: Any, mime_type: str = "application/json") -> BinaryPayload:
    """Build a payload holding the compact JSON text of a value."""
    text = value if isinstance(value, str) else json.dumps(value, separators=(",", ":"))
    return BinaryPayload(
        data=base64.b64encode(text.encode("utf-8")).decode("ascii"),
        mime_type=mime_type
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def nested_structured() -> Dict[str, Any]:
    """Nested structured data for path tests."""
    return {
        "customer": {
            "name": "Alice",
            "address": {
                "city": "New York",
                "zip": "10001"
            }
        },
        "items": [
            {"sku": "A-1", "qty": 2},
            {"sku": "B-7", "qty": 1}
        ],
        "paid": True
    }


@pytest.fixture
def binary_record() -> Record:
    """Record with a JSON payload under 'data' and a second payload."""
    return Record(
        structured={"existing": 1},
        binary={
            "data": payload_for({"x": 5}),
            "attachment": payload_for("plain text", mime_type="text/plain")
        }
    )


@pytest.fixture
def record_batch() -> List[Record]:
    """Batch where the middle record has no binary side."""
    return [
        Record(structured={"id": 1}, binary={"data": payload_for({"value": "first"})}),
        Record(structured={"id": 2}),
        Record(structured={"id": 3}, binary={"data": payload_for({"value": "third"})}),
    ]


@pytest.fixture
def make_payload():
    """Factory for JSON payloads."""
    return payload_for
