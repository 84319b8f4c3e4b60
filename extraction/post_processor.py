"""
Post-processing of extracted field values.

Extractors return raw captured strings. This module cleans them into the
final record: numeric coercion of totals, removal of trailing OCR artifacts,
whitespace and comma normalization, and derived totals.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from .config import ExtractionConfig
from .models import LineItem, ParsedDocument

logger = logging.getLogger(__name__)

WHITESPACE = re.compile(r'\s+')
COMMA_SPACING = re.compile(r'\s*,\s*')
TRAILING_PUNCTUATION = re.compile(r'[\s,;:\-]+$')
DOCUMENT_NUMBER_NOISE = re.compile(r'[^A-Za-z0-9\-_/]')


def to_number(value: Any, default: float = 0.0,
              currency_symbols: Iterable[str] = ('₹',)) -> float:
    """
    Convert a captured amount to a float.

    Currency symbols, thousands separators and whitespace are removed before
    parsing. Anything unparseable yields the default.

    Args:
        value: Number or numeric string (e.g. "₹1,234.50")
        default: Value returned when conversion fails
        currency_symbols: Symbols to strip

    Returns:
        Parsed number
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float, Decimal)):
        return float(value)

    cleaned = str(value)
    for symbol in currency_symbols:
        cleaned = cleaned.replace(symbol, '')
    cleaned = cleaned.replace(',', '')
    cleaned = WHITESPACE.sub('', cleaned)
    if not cleaned:
        return default

    try:
        number = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return default
    if not number.is_finite():
        return default
    return float(number)


def strip_trailing_artifacts(value: str, patterns: Iterable[str]) -> str:
    """
    Remove trailing artifacts until none is left.

    Args:
        value: Text to clean
        patterns: Regular expressions anchored to the end of the text

    Returns:
        Text without trailing artifacts
    """
    compiled = [re.compile(r'(?:^|\s+)(?:' + p + r')\s*$', re.IGNORECASE) for p in patterns]
    previous = None
    while value != previous:
        previous = value
        for pattern in compiled:
            value = pattern.sub('', value)
        value = TRAILING_PUNCTUATION.sub('', value)
    return value


class PostProcessor:
    """Cleans raw extractor output into a ParsedDocument."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        self._name_artifacts = [r'\b' + re.escape(word) + r'\b' for word in self.config.name_artifacts]

    def to_number(self, value: Any, default: float = 0.0) -> float:
        return to_number(value, default, self.config.currency_symbols)

    def clean_name(self, value: str) -> str:
        value = re.sub(r'[^\w\s]', '', value or '')
        value = WHITESPACE.sub(' ', value).strip()
        return strip_trailing_artifacts(value, self._name_artifacts)

    def clean_address(self, value: str) -> str:
        return self._clean_block(value, self.config.address_artifacts)

    def clean_notes(self, value: str) -> str:
        return self._clean_block(value, self.config.notes_artifacts)

    def _clean_block(self, value: str, artifacts: List[str]) -> str:
        value = WHITESPACE.sub(' ', value or '').strip()
        value = strip_trailing_artifacts(value, artifacts)
        value = COMMA_SPACING.sub(', ', value)
        return TRAILING_PUNCTUATION.sub('', value).strip()

    def clean_document_number(self, value: str) -> str:
        cleaned = DOCUMENT_NUMBER_NOISE.sub('', value or '').strip()
        if 0 < len(cleaned) < 3:
            logger.warning(f"Document number '{cleaned}' looks incomplete")
        return cleaned

    def process(self, raw: Dict[str, Any]) -> ParsedDocument:
        """
        Build the final record from raw extractor output.

        Args:
            raw: Raw values keyed by ParsedDocument field name; totals may be
                strings such as "1,234.50"

        Returns:
            Cleaned ParsedDocument
        """
        items: List[LineItem] = list(raw.get('items') or [])

        document = ParsedDocument(
            document_number=self.clean_document_number(raw.get('document_number', '')),
            document_date=(raw.get('document_date') or '').strip(),
            party_name=self.clean_name(raw.get('party_name', '')),
            party_phone=(raw.get('party_phone') or '').strip(),
            party_address=self.clean_address(raw.get('party_address', '')),
            items=items,
            subtotal=self.to_number(raw.get('subtotal')),
            total_tax=self.to_number(raw.get('total_tax')),
            total=self.to_number(raw.get('total')),
            notes=self.clean_notes(raw.get('notes', ''))
        )

        if self.config.compute_missing_totals and items:
            self.fill_missing_totals(document)

        return document

    def fill_missing_totals(self, document: ParsedDocument) -> None:
        """
        Derive subtotal, tax and total from the items when they were not printed.

        Tax is the difference between each line amount and its net value, so a
        captured amount is never contradicted by the item's tax percentage.
        """
        if not document.subtotal:
            document.subtotal = round(sum(item.net_amount for item in document.items), 2)
            logger.debug(f"Derived subtotal from items: {document.subtotal}")
        if not document.total_tax:
            document.total_tax = round(
                sum(item.amount - item.net_amount for item in document.items), 2
            )
            logger.debug(f"Derived total tax from items: {document.total_tax}")
        if not document.total:
            document.total = round(document.subtotal + document.total_tax, 2)
            logger.debug(f"Derived total: {document.total}")
