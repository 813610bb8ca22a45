"""Tests for the converter."""

import base64
import json
import pytest
from binary_mover.converter import Converter
from binary_mover.models import (
    BinaryPayload,
    Record,
    BinaryToStructuredOptions,
    StructuredToBinaryOptions,
)
from binary_mover.types import (
    EncodingFailureError,
    InvalidPayloadError,
    ParseFailureError,
    UnsupportedValueError,
)
from binary_mover.utils.paths import PathUtils


def b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class TestBinaryToStructured:
    """Tests for moving binary payloads into structured data."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = Converter()

    def test_set_all_data_scenario(self):
        """Test the whole structured value is replaced and the source removed."""
        record = Record(
            structured={},
            binary={"data": BinaryPayload(data=b64('{"x":5}'), mime_type="application/json")}
        )

        result = self.converter.convert(record, BinaryToStructuredOptions(set_all_data=True, encoding="utf8"))

        assert result.structured == {"x": 5}
        assert result.binary == {}

    def test_set_all_data_discards_existing_structured(self, binary_record):
        """Test existing structured data does not survive set_all_data."""
        result = self.converter.convert(binary_record, BinaryToStructuredOptions())

        assert result.structured == {"x": 5}
        assert "existing" not in result.structured

    def test_partial_keeps_text(self, binary_record):
        """Test the decoded text is stored without parsing by default."""
        options = BinaryToStructuredOptions(set_all_data=False, destination_key="payload.text")

        result = self.converter.convert(binary_record, options)

        assert result.structured == {"existing": 1, "payload": {"text": '{"x":5}'}}

    def test_partial_json_parse(self, binary_record):
        """Test the decoded text is parsed when requested."""
        options = BinaryToStructuredOptions(set_all_data=False, destination_key="parsed", json_parse=True)

        result = self.converter.convert(binary_record, options)

        assert result.structured == {"existing": 1, "parsed": {"x": 5}}

    def test_removes_exactly_the_source(self, binary_record):
        """Test only the consumed binary entry is removed."""
        options = BinaryToStructuredOptions(set_all_data=False, destination_key="out")

        result = self.converter.convert(binary_record, options)

        assert set(result.binary) == {"attachment"}
        assert result.binary["attachment"] == binary_record.binary["attachment"]

    def test_keep_source_shares_binary(self, binary_record):
        """Test keep_source reuses the input binary mapping."""
        options = BinaryToStructuredOptions(set_all_data=False, destination_key="out", keep_source=True)

        result = self.converter.convert(binary_record, options)

        assert result.binary is binary_record.binary
        assert "data" in result.binary

    def test_input_not_mutated(self, binary_record):
        """Test the input record is left unchanged."""
        structured_before = PathUtils.clone(binary_record.structured)
        binary_before = PathUtils.clone(binary_record.binary)
        options = BinaryToStructuredOptions(set_all_data=False, destination_key="existing")

        result = self.converter.convert(binary_record, options)

        assert binary_record.structured == structured_before
        assert binary_record.binary == binary_before
        assert result.structured is not binary_record.structured

    def test_nested_source_key(self, make_payload):
        """Test deep binary keys are read and removed."""
        record = Record(structured={}, binary={"files": {"doc": make_payload({"n": 1}), "other": make_payload(2)}})
        options = BinaryToStructuredOptions(source_key="files.doc")

        result = self.converter.convert(record, options)

        assert result.structured == {"n": 1}
        assert result.binary == {"files": {"other": make_payload(2)}}

    def test_missing_source_drops(self, binary_record):
        """Test a record without the source key is dropped."""
        options = BinaryToStructuredOptions(source_key="missing")

        assert self.converter.convert(binary_record, options) is None

    def test_no_binary_side_drops(self):
        """Test a record with no binary side is dropped."""
        assert self.converter.convert(Record(structured={"a": 1}), BinaryToStructuredOptions()) is None

    def test_branch_is_not_a_payload(self, make_payload):
        """Test reading a branch of the binary tree fails."""
        record = Record(binary={"files": {"doc": make_payload(1)}})

        with pytest.raises(InvalidPayloadError, match="'files' does not hold a payload"):
            self.converter.convert(record, BinaryToStructuredOptions(source_key="files"))

    def test_parse_failure_set_all_data(self, make_payload):
        """Test invalid JSON fails the record when set_all_data is used."""
        record = Record(binary={"data": make_payload("not json", mime_type="text/plain")})

        with pytest.raises(ParseFailureError):
            self.converter.convert(record, BinaryToStructuredOptions())

    def test_parse_failure_json_parse(self, make_payload):
        """Test invalid JSON fails the record when json_parse is used."""
        record = Record(binary={"data": make_payload("{broken", mime_type="text/plain")})
        options = BinaryToStructuredOptions(set_all_data=False, json_parse=True)

        with pytest.raises(ParseFailureError):
            self.converter.convert(record, options)

    def test_text_is_not_parsed_without_json_parse(self, make_payload):
        """Test invalid JSON text is fine when it is not parsed."""
        record = Record(binary={"data": make_payload("{broken", mime_type="text/plain")})
        options = BinaryToStructuredOptions(set_all_data=False, destination_key="raw")

        assert self.converter.convert(record, options).structured == {"raw": "{broken"}

    def test_latin1_encoding(self):
        """Test payloads are decoded with the configured encoding."""
        record = Record(binary={"data": BinaryPayload.from_bytes(b"caf\xe9", mime_type="text/plain")})
        options = BinaryToStructuredOptions(set_all_data=False, destination_key="text", encoding="latin1")

        assert self.converter.convert(record, options).structured == {"text": "café"}

    def test_unknown_encoding(self, binary_record):
        """Test unknown encodings fail the record."""
        options = BinaryToStructuredOptions(set_all_data=False, encoding="klingon")

        with pytest.raises(EncodingFailureError):
            self.converter.convert(binary_record, options)

    def test_invalid_byte_sequence(self):
        """Test undecodable bytes fail the record."""
        record = Record(binary={"data": BinaryPayload.from_bytes(b"\xff\xfe\xfa")})
        options = BinaryToStructuredOptions(set_all_data=False)

        with pytest.raises(EncodingFailureError):
            self.converter.convert(record, options)


class TestStructuredToBinary:
    """Tests for moving structured data into binary payloads."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = Converter()

    def test_convert_all_data_scenario(self):
        """Test all structured data becomes a JSON payload."""
        record = Record(structured={"a": 1}, binary={})
        options = StructuredToBinaryOptions(convert_all_data=True, destination_key="data")

        result = self.converter.convert(record, options)

        assert result.structured == {}
        assert result.binary == {
            "data": BinaryPayload(data=b64('{"a":1}'), mime_type="application/json")
        }

    def test_partial_removes_source(self, nested_structured):
        """Test only the source key is removed from structured data."""
        record = Record(structured=nested_structured)
        options = StructuredToBinaryOptions(convert_all_data=False, source_key="customer.address")

        result = self.converter.convert(record, options)

        expected = PathUtils.clone(nested_structured)
        del expected["customer"]["address"]
        assert result.structured == expected
        assert json.loads(result.binary["data"].to_bytes()) == {"city": "New York", "zip": "10001"}

    def test_starts_empty_binary(self):
        """Test a record without binary data gets a new binary side."""
        record = Record(structured={"a": 1})

        result = self.converter.convert(record, StructuredToBinaryOptions())

        assert set(result.binary) == {"data"}

    def test_existing_binary_is_copied(self, binary_record):
        """Test existing binary entries are kept and the input is untouched."""
        options = StructuredToBinaryOptions(destination_key="exports.json")

        result = self.converter.convert(binary_record, options)

        assert result.binary["data"] == binary_record.binary["data"]
        assert result.binary["attachment"] == binary_record.binary["attachment"]
        assert "exports" in result.binary
        assert "exports" not in binary_record.binary
        assert result.binary is not binary_record.binary

    def test_nested_destination_key(self):
        """Test deep binary keys are created."""
        record = Record(structured={"a": 1})
        options = StructuredToBinaryOptions(destination_key="level1.level2.file")

        result = self.converter.convert(record, options)

        assert isinstance(result.binary["level1"]["level2"]["file"], BinaryPayload)

    def test_keep_source_shares_structured(self, nested_structured):
        """Test keep_source reuses the input structured value."""
        record = Record(structured=nested_structured)
        options = StructuredToBinaryOptions(convert_all_data=False, source_key="paid", keep_source=True)

        result = self.converter.convert(record, options)

        assert result.structured is nested_structured
        assert result.binary["data"].to_bytes() == b"true"

    def test_mime_type(self):
        """Test the configured mime type is stored on the payload."""
        options = StructuredToBinaryOptions(mime_type="text/csv")

        result = self.converter.convert(Record(structured={"a": 1}), options)

        assert result.binary["data"].mime_type == "text/csv"

    def test_raw_data(self):
        """Test raw strings are stored verbatim rather than as JSON strings."""
        record = Record(structured={"csv": "a,b\n1,2"})
        options = StructuredToBinaryOptions(convert_all_data=False, source_key="csv", use_raw_data=True,
                                            mime_type="text/csv")

        result = self.converter.convert(record, options)

        assert result.binary["data"].to_bytes() == b"a,b\n1,2"
        assert result.structured == {}

    def test_serialized_string(self):
        """Test strings are serialized as JSON strings without use_raw_data."""
        record = Record(structured={"csv": "a,b"})
        options = StructuredToBinaryOptions(convert_all_data=False, source_key="csv")

        result = self.converter.convert(record, options)

        assert result.binary["data"].to_bytes() == b'"a,b"'

    def test_raw_data_requires_bytes(self):
        """Test raw data that is not byte-representable fails the record."""
        options = StructuredToBinaryOptions(use_raw_data=True)

        with pytest.raises(EncodingFailureError):
            self.converter.convert(Record(structured={"a": 1}), options)

    def test_missing_source_drops(self):
        """Test a record without the source key is dropped."""
        options = StructuredToBinaryOptions(convert_all_data=False, source_key="missing")

        assert self.converter.convert(Record(structured={"a": 1}), options) is None

    def test_null_source_is_converted(self):
        """Test a stored null is converted rather than dropped."""
        options = StructuredToBinaryOptions(convert_all_data=False, source_key="a")

        result = self.converter.convert(Record(structured={"a": None}), options)

        assert result.binary["data"].to_bytes() == b"null"
        assert result.structured == {}

    def test_unsupported_structured_value(self):
        """Test non-JSON content fails loudly."""
        record = Record(structured={"when": object()})

        with pytest.raises(UnsupportedValueError):
            self.converter.convert(record, StructuredToBinaryOptions())


class TestRoundTrip:
    """Tests converting in both directions."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = Converter()

    @pytest.mark.parametrize("value", [
        {"nested": {"list": [1, 2.5, None, True], "text": "héllo"}},
        [1, "two", {"three": 3}],
        "just text",
        0,
    ])
    def test_structured_round_trip(self, value):
        """Test a value survives structured -> binary -> structured."""
        record = Record(structured={"src": value, "other": "kept"})
        to_binary = StructuredToBinaryOptions(convert_all_data=False, source_key="src",
                                              destination_key="blob", keep_source=True)
        to_structured = BinaryToStructuredOptions(set_all_data=False, source_key="blob",
                                                  destination_key="dst", json_parse=True, keep_source=True)

        result = self.converter.convert(self.converter.convert(record, to_binary), to_structured)

        assert result.structured["dst"] == value
        assert result.structured["src"] == value
        assert result.structured["other"] == "kept"


class TestNonFiniteJson:
    """Tests for payloads holding NaN or Infinity literals."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = Converter()

    @pytest.mark.parametrize("text", [b'{"x": NaN}', b'{"x": Infinity}'])
    def test_set_all_data(self, text):
        """Test non-finite literals fail the record when replacing all data."""
        record = Record(binary={"data": BinaryPayload.from_bytes(text)})

        with pytest.raises(ParseFailureError):
            self.converter.convert(record, BinaryToStructuredOptions())

    @pytest.mark.parametrize("text", [b'{"x": NaN}', b'{"x": -Infinity}'])
    def test_json_parse(self, text):
        """Test non-finite literals fail the record when parsing into a key."""
        record = Record(binary={"data": BinaryPayload.from_bytes(text)})
        options = BinaryToStructuredOptions(set_all_data=False, json_parse=True)

        with pytest.raises(ParseFailureError):
            self.converter.convert(record, options)
