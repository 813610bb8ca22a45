#!/usr/bin/env python3
"""
Example usage of the Binary Mover.

This script moves order data into binary payloads and back again,
printing the records after each step.
"""

import json
from binary_mover import Converter, Record, RecordConversionError


def show(title, records):
    print(f"\n{title}:")
    print(json.dumps([record.to_dict() for record in records], indent=2)[:600])


def main():
    """Main example function."""
    print("Binary Mover Example")
    print("=" * 50)

    records = [
        Record(structured={
            "order": {"id": 1001, "lines": [{"sku": "A-1", "qty": 2}]},
            "customer": "Alice Johnson"
        }),
        Record(structured={
            "order": {"id": 1002, "lines": [{"sku": "B-7", "qty": 1}]},
            "customer": "Bob Smith"
        }),
        # No order, so this record is dropped
        Record(structured={"customer": "Carol White"}),
    ]
    show("Input records", records)

    converter = Converter()

    try:
        packed = converter.convert_batch(records, "jsonToBinary", {
            "convertAllData": False,
            "sourceKey": "order",
            "destinationKey": "exports.order"
        })
        show(f"Packed ({packed.dropped_count} dropped)", packed.records)

        unpacked = converter.convert_batch(packed.records, "binaryToJson", {
            "setAllData": False,
            "sourceKey": "exports.order",
            "destinationKey": "order",
            "jsonParse": True
        })
        show("Unpacked", unpacked.records)
    except RecordConversionError as e:
        print(f"❌ {e}")
        return

    print()
    print(converter.profiler.export_metrics("summary"))


if __name__ == "__main__":
    main()
