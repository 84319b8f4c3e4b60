"""
Output formatting utilities for the CLI interface.

This module provides functions for formatting output, setting up logging,
and displaying extracted bill records as tables or JSON.
"""

import json
import logging
from decimal import Decimal
from typing import List, Dict, Any, Optional, Union

import click
from tabulate import tabulate

from extraction.models import ParsedDocument


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Setup logging configuration for the CLI application.

    Args:
        verbose: Enable verbose (DEBUG) logging
        quiet: Suppress non-essential output (WARNING+ only)
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    # Configure root logger; log records go to stderr so stdout stays parseable
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True
    )


def format_amount(amount: Union[Decimal, float, int, None]) -> str:
    """
    Format a numeric amount with two decimals.

    Args:
        amount: Numeric amount to format

    Returns:
        Formatted amount string
    """
    if amount is None:
        return "N/A"

    try:
        return f"{float(amount):,.2f}"
    except (ValueError, TypeError):
        return str(amount)


def truncate_text(text: Optional[str], max_length: int = 50) -> str:
    """
    Truncate text to a maximum length with ellipsis.

    Args:
        text: Text to truncate
        max_length: Maximum length before truncation

    Returns:
        Truncated text with ellipsis if needed
    """
    if not text:
        return ""

    if len(text) <= max_length:
        return text

    return text[:max_length - 3] + "..."


def format_table(data: List[Dict[str, Any]], headers: Optional[List[str]] = None,
                 tablefmt: str = "grid") -> str:
    """
    Format data as a table using tabulate.

    Args:
        data: List of dictionaries containing row data
        headers: Optional list of column headers
        tablefmt: Table format style

    Returns:
        Formatted table string
    """
    if not data:
        return "No data to display."

    if headers is None:
        headers = list(data[0].keys()) if data else []

    rows = []
    for row in data:
        formatted_row = []
        for header in headers:
            value = row.get(header, "")

            if isinstance(value, (Decimal, float)) and header.lower() in ['rate', 'amount']:
                formatted_row.append(format_amount(value))
            elif isinstance(value, str) and len(value) > 50:
                formatted_row.append(truncate_text(value))
            else:
                formatted_row.append(str(value) if value is not None else "")

        rows.append(formatted_row)

    return tabulate(rows, headers=headers, tablefmt=tablefmt)


def format_document(document: ParsedDocument, tablefmt: str = "grid") -> str:
    """
    Format a parsed bill as header fields, an items table and totals.

    Args:
        document: Parsed document to display
        tablefmt: Table format style

    Returns:
        Formatted text block
    """
    number = document.document_number
    if document.is_document_number_incomplete:
        number = f"{number} (possibly incomplete)"

    header = [
        ["Document Number", number],
        ["Date", document.document_date],
        ["Party Name", document.party_name],
        ["Phone", document.party_phone],
        ["Address", truncate_text(document.party_address, 60)],
        ["Notes", truncate_text(document.notes, 60)],
    ]

    items = [item.to_dict() for item in document.items]
    totals = [
        ["Subtotal", format_amount(document.subtotal)],
        ["Total Tax", format_amount(document.total_tax)],
        ["Total", format_amount(document.total)],
    ]

    sections = [
        tabulate(header, tablefmt=tablefmt),
        format_table(items, headers=['description', 'quantity', 'rate', 'taxPct', 'amount'],
                     tablefmt=tablefmt),
        tabulate(totals, tablefmt=tablefmt),
    ]
    return "\n\n".join(sections)


def format_json(data: Any, indent: int = 2) -> str:
    """
    Format data as JSON string.

    Args:
        data: Data to format as JSON
        indent: JSON indentation level

    Returns:
        Formatted JSON string
    """
    def json_serializer(obj):
        """Custom JSON serializer for special types."""
        if isinstance(obj, Decimal):
            return float(obj)
        elif hasattr(obj, 'to_dict'):
            return obj.to_dict()
        raise TypeError(f"Object of type {type(obj)} is not JSON serializable")

    return json.dumps(data, indent=indent, default=json_serializer, ensure_ascii=False)


def print_success(message: str) -> None:
    """Print a success message with green checkmark."""
    click.echo(click.style(f"✓ {message}", fg='green'))


def print_warning(message: str) -> None:
    """Print a warning message with yellow warning symbol."""
    click.echo(click.style(f"⚠ Warning: {message}", fg='yellow'))


def print_info(message: str) -> None:
    """Print an info message with blue info symbol."""
    click.echo(click.style(f"ℹ {message}", fg='blue'))
