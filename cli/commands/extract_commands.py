"""
Extraction commands for the CLI interface.

This module implements the extract command, which reads OCR text from a file
or standard input and prints the structured bill record.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import click

from cli.context import pass_context
from cli.exceptions import CLIError, InputError
from cli.formatters import format_document, format_json, print_info, print_success, print_warning
from extraction.rows import merge_items


logger = logging.getLogger(__name__)


def read_input_text(input_path: Optional[str]) -> str:
    """
    Read OCR text from a file, or from stdin when no path (or '-') is given.

    Raises:
        InputError: If the file cannot be read
    """
    if not input_path or input_path == '-':
        return click.get_text_stream('stdin').read()

    path = Path(input_path)
    if not path.is_file():
        raise InputError(f"File not found: {input_path}")

    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read {input_path}: {e}")


def load_existing_items(items_path: str) -> List[Any]:
    """
    Load a JSON array of item rows already recorded for the bill.

    Raises:
        InputError: If the file is unreadable or is not a JSON array
    """
    try:
        with open(items_path, 'r', encoding='utf-8') as f:
            rows = json.load(f)
    except OSError as e:
        raise InputError(f"Cannot read existing items {items_path}: {e}")
    except json.JSONDecodeError as e:
        raise InputError(f"Existing items file is not valid JSON: {e}")

    if not isinstance(rows, list):
        raise InputError("Existing items file must contain a JSON array")
    return rows


@click.command(name='extract')
@click.argument('input_path', type=click.Path(), required=False)
@click.option('--format', '-f', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@click.option('--existing-items', type=click.Path(),
              help='JSON array of item rows to merge the extracted items into')
@click.option('--output', '-o', type=click.Path(), help='Write the result to a file')
@pass_context
def extract(ctx, input_path, output_format, existing_items, output):
    """
    Extract a structured bill record from OCR text.

    INPUT_PATH is a text file; omit it or use '-' to read standard input.

    Examples:
        # Show the record as tables
        bill-extract extract receipt.txt

        # Emit JSON for the form layer
        cat receipt.txt | bill-extract extract --format json

        # Merge with items already on the bill
        bill-extract extract receipt.txt --existing-items items.json -f json
    """
    text = read_input_text(input_path)
    parser = ctx.get_parser()

    try:
        document = parser.parse(text)
    except Exception as e:
        logger.exception("Extraction failed")
        raise CLIError(f"Extraction failed: {e}")

    if existing_items:
        rows = load_existing_items(existing_items)
        document.items = merge_items(rows, document.items)
        logger.info(f"Merged with {len(rows)} existing rows, {len(document.items)} items total")

    if output_format == 'json':
        rendered = format_json(document.to_dict())
    else:
        rendered = format_document(document)

    if output:
        try:
            Path(output).write_text(rendered + "\n", encoding='utf-8')
        except OSError as e:
            raise CLIError(f"Cannot write {output}: {e}")
        if not ctx.quiet:
            print_success(f"Record written to {output}")
    else:
        click.echo(rendered)

    if output_format == 'table' and not ctx.quiet:
        if document.is_document_number_incomplete:
            print_warning("Document number looks incomplete, please verify it")
        missing = document.missing_fields()
        if missing:
            print_info(f"Enter manually: {', '.join(missing)}")
