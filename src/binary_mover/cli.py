"""Command-line interface for the Binary Mover."""

import json
import logging
import click
from pathlib import Path
from typing import Any, Dict, List, Optional
from .converter import Converter
from .error_handler import ErrorHandler
from .models import Record, BinaryToStructuredOptions, StructuredToBinaryOptions, ConversionOptions
from .types import RecordConversionError


def _load_records(input_file: Path) -> List[Record]:
    document = input_file.read_text(encoding='utf-8')

    validation = ErrorHandler().validate_input(document)
    if not validation.is_valid:
        details = "; ".join(
            f"{error.location}: {error.message}" if error.location else error.message
            for error in validation.errors
        )
        raise click.ClickException(f"Invalid input: {details}")

    return [Record.from_dict(item) for item in json.loads(document)]


def _run(input_file: Path, options: ConversionOptions, output: Optional[str],
         continue_on_error: bool, verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    records = _load_records(input_file)
    click.echo(f"Converting {len(records)} records ({options.mode.value})...", err=True)
    try:
        result = Converter().convert_batch(records, options, halt_on_error=not continue_on_error)
    except RecordConversionError as e:
        raise click.ClickException(str(e))

    payload: List[Dict[str, Any]] = [record.to_dict() for record in result.records]
    document = json.dumps(payload, indent=2, ensure_ascii=False)

    if output:
        Path(output).write_text(document, encoding='utf-8')
        click.echo(f"✅ Wrote {len(payload)} records to {output}", err=True)
    else:
        click.echo(document)

    if result.dropped_count:
        click.echo(f"Dropped {result.dropped_count} records without source data", err=True)
    for error in result.errors:
        click.echo(f"   • {error}", err=True)
    if not result.success:
        raise click.exceptions.Exit(1)


@click.group()
@click.version_option(version="1.0.0")
def main():
    """Binary Mover - Move data between binary payloads and JSON."""
    pass


@main.command(name="to-json")
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--source-key', '-s', default='data', help='Binary key to read (dot notation)')
@click.option('--destination-key', '-d', default='data', help='JSON key to write (dot notation)')
@click.option('--all-data/--no-all-data', default=True, help='Replace all JSON data with the parsed payload')
@click.option('--encoding', '-e', default='utf8', help='Encoding of the payload bytes (default: utf8)')
@click.option('--json-parse', is_flag=True, help='Parse the payload text as JSON before writing it')
@click.option('--keep-source', is_flag=True, help='Keep the binary entry that was read')
@click.option('--output', '-o', help='Output JSON file path')
@click.option('--continue-on-error', is_flag=True, help='Report failing records and keep going')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def to_json(input_file: Path, source_key: str, destination_key: str, all_data: bool,
            encoding: str, json_parse: bool, keep_source: bool, output: str,
            continue_on_error: bool, verbose: bool):
    """Move binary payloads of each record into its JSON data."""
    try:
        options = BinaryToStructuredOptions(
            set_all_data=all_data,
            source_key=source_key,
            destination_key=destination_key,
            encoding=encoding,
            json_parse=json_parse,
            keep_source=keep_source
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    _run(input_file, options, output, continue_on_error, verbose)


@main.command(name="to-binary")
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--source-key', '-s', default='data', help='JSON key to read (dot notation)')
@click.option('--destination-key', '-d', default='data', help='Binary key to write (dot notation)')
@click.option('--all-data/--no-all-data', default=True, help='Convert all JSON data of the record')
@click.option('--raw', is_flag=True, help='Use the value as is instead of serializing it to JSON')
@click.option('--mime-type', '-m', default='application/json', help='Mime type of the payload')
@click.option('--keep-source', is_flag=True, help='Keep the JSON data that was read')
@click.option('--output', '-o', help='Output JSON file path')
@click.option('--continue-on-error', is_flag=True, help='Report failing records and keep going')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def to_binary(input_file: Path, source_key: str, destination_key: str, all_data: bool,
              raw: bool, mime_type: str, keep_source: bool, output: str,
              continue_on_error: bool, verbose: bool):
    """Move JSON data of each record into a binary payload."""
    try:
        options = StructuredToBinaryOptions(
            convert_all_data=all_data,
            source_key=source_key,
            destination_key=destination_key,
            use_raw_data=raw,
            mime_type=mime_type,
            keep_source=keep_source
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    _run(input_file, options, output, continue_on_error, verbose)


if __name__ == '__main__':
    main()
