"""
Header field extractors.

Each extractor is an ordered cascade of matchers over the normalized text.
The first matcher that produces a value wins; when none does, the field is
left empty. Extractors are independent of each other.
"""

import logging
import re
from datetime import date
from typing import Dict, List, Optional

from .cascade import Matcher, boundary_matcher, first_match_indexed, pattern_matcher
from .config import ExtractionConfig

logger = logging.getLogger(__name__)

NUMBER = r'(\d[\d,]*(?:\.\d+)?)'


def _iso_date(year: str, month: str, day: str) -> Optional[str]:
    """Return an ISO date string, or None if the parts are not a calendar date."""
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return None


class FieldExtractor:
    """
    Base class for single-value field extractors.

    Subclasses implement build_matchers() and return the cascade in
    priority order.
    """

    field_name = 'field'

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        self.matchers: List[Matcher] = self.build_matchers()

    def build_matchers(self) -> List[Matcher]:
        raise NotImplementedError

    def extract(self, text: str) -> str:
        """
        Extract the field value.

        Args:
            text: Normalized text

        Returns:
            Extracted value, or an empty string when no matcher succeeds
        """
        if not text:
            return ""

        value, index = first_match_indexed(text, self.matchers)
        if value is None:
            logger.debug(f"No {self.field_name} found")
            return ""

        logger.debug(f"Found {self.field_name} with pattern {index}: {value}")
        return value


class DateExtractor(FieldExtractor):
    """
    Extracts the document date and emits it as ISO YYYY-MM-DD.

    Order: labeled ISO date, bare ISO date, MM/DD/YYYY, MM-DD-YYYY.
    The slash form also accepts a single space, since the normalizer
    replaces slashes with spaces. Impossible dates are skipped.
    """

    field_name = 'document date'

    def build_matchers(self) -> List[Matcher]:
        def from_ymd(match):
            return _iso_date(match.group(1), match.group(2), match.group(3))

        def from_mdy(match):
            return _iso_date(match.group(3), match.group(1), match.group(2))

        return [
            pattern_matcher(
                r'(?:\b(?:Invoice|Bill|Document)\s*)?\bDate\s*[:\-]?\s*(\d{4})-(\d{2})-(\d{2})\b',
                re.IGNORECASE,
                transform=from_ymd
            ),
            pattern_matcher(r'\b(\d{4})-(\d{2})-(\d{2})\b', transform=from_ymd),
            pattern_matcher(r'\b(\d{2})[/ ](\d{2})[/ ](\d{4})\b', transform=from_mdy),
            pattern_matcher(r'\b(\d{2})-(\d{2})-(\d{4})\b', transform=from_mdy),
        ]


class PartyNameExtractor(FieldExtractor):
    """
    Extracts the counterparty (customer or supplier) name.

    Labeled forms come first. The fallback takes the first pair of
    capitalized words that are not label vocabulary, country names or
    catalog items.
    """

    field_name = 'party name'

    NAME = r'([A-Za-z][A-Za-z ]*)'

    LABEL_PATTERNS = [
        r'\bCustomer\s*Name\s*[:\-]?\s*',
        r'\bSupplier\s*Name\s*[:\-]?\s*',
        r'\bCustomer\s*[:\-]\s*',
        r'\bSupplier\s*[:\-]\s*',
        r'\bVendor\s*[:\-]\s*',
        r'\bParty\s*[:\-]\s*',
        r'\bBill\s*To\s*[:\-]?\s*',
    ]

    def build_matchers(self) -> List[Matcher]:
        excluded = {word.upper() for word in self.config.label_words}
        excluded.update(country.upper() for country in self.config.countries)
        excluded.update(item.name.upper() for item in self.config.catalog)

        def not_label(value: str) -> bool:
            return not any(word.upper() in excluded for word in value.split())

        matchers = [
            pattern_matcher(label + self.NAME, re.IGNORECASE)
            for label in self.LABEL_PATTERNS
        ]
        # Lookahead so a rejected pair does not consume the next name's first word
        matchers.append(pattern_matcher(
            r'\b(?=([A-Z][a-z]+\s+[A-Z][a-z]+)\b)',
            accept=not_label
        ))
        return matchers


class PhoneExtractor(FieldExtractor):
    """Extracts a 10-12 digit phone number, labeled first, then bare."""

    field_name = 'party phone'

    def build_matchers(self) -> List[Matcher]:
        return [
            pattern_matcher(
                r'\b(?:Phone|Mobile|Mob|Tel|Contact)\b\.?\s*(?:No\b\.?)?\s*[:\-]?\s*(\d{10,12})(?!\d)',
                re.IGNORECASE
            ),
            pattern_matcher(r'(?<!\d)(\d{10,12})(?!\d)'),
        ]


class AddressExtractor(FieldExtractor):
    """
    Extracts the counterparty address.

    The labeled block runs until the next known label. Without a label, a
    street number followed by words and a known country is accepted.
    """

    field_name = 'party address'

    def build_matchers(self) -> List[Matcher]:
        countries = '|'.join(re.escape(country) for country in self.config.countries)
        matchers = [
            boundary_matcher(r'Address', self.config.address_boundaries),
        ]
        if countries:
            matchers.append(pattern_matcher(
                r'(\b\d+\s+[A-Za-z][A-Za-z ,.\-]*?\b(?:' + countries + r'))\b',
                re.IGNORECASE
            ))
        return matchers


class NotesExtractor(FieldExtractor):
    """Extracts free-text notes up to trailing OCR chrome (share/lens buttons, clock)."""

    field_name = 'notes'

    def build_matchers(self) -> List[Matcher]:
        return [
            boundary_matcher(
                r'Notes|Remarks|Terms',
                self.config.notes_boundaries,
                self.config.notes_stop_patterns
            ),
        ]


class TotalsExtractor:
    """
    Extracts the printed subtotal, total tax and grand total.

    Values are returned as raw numeric strings (thousands separators kept);
    numeric conversion happens in post-processing. ``Total`` is word
    bounded so a SubTotal value is never taken as the grand total.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()

        symbols = ''.join(re.escape(s) for s in self.config.currency_symbols)
        currency = r'(?:[' + symbols + r']\s*)?' if symbols else ''
        amount = r'\s*[:\-]?\s*' + currency + NUMBER

        self.cascades: Dict[str, List[Matcher]] = {
            'subtotal': [
                pattern_matcher(r'\bSub\s*-?\s*Total' + amount, re.IGNORECASE),
            ],
            'total_tax': [
                pattern_matcher(r'\bTotal\s*(?:GST|Tax)' + amount, re.IGNORECASE),
                pattern_matcher(r'\b(?:GST|Tax)\s*Total' + amount, re.IGNORECASE),
            ],
            'total': [
                pattern_matcher(r'\bGrand\s*Total' + amount, re.IGNORECASE),
                pattern_matcher(r'\bTotal\s*Amount' + amount, re.IGNORECASE),
                pattern_matcher(r'(?<!Sub\s)(?<!Sub-)\bTotal' + amount, re.IGNORECASE),
            ],
        }

    def extract(self, text: str) -> Dict[str, str]:
        """
        Extract all totals.

        Args:
            text: Normalized text

        Returns:
            Dictionary with subtotal, total_tax and total raw strings
            (empty string when not printed)
        """
        totals = {}
        for name, matchers in self.cascades.items():
            value, index = first_match_indexed(text, matchers) if text else (None, None)
            totals[name] = value or ""
            if value:
                logger.debug(f"Found {name} with pattern {index}: {value}")
        return totals
