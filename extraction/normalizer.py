"""
Text normalization for raw OCR output.

OCR text arrives with irregular spacing, line breaks and stray symbols.
Every extractor runs against the single normalized string produced here.
"""

import re
from typing import Iterable, Optional

DEFAULT_CURRENCY_SYMBOLS = ('₹',)

WHITESPACE_RUN = re.compile(r'\s{2,}')
NEWLINES = re.compile(r'[\r\n]')


class TextNormalizer:
    """
    Collapses whitespace and strips characters outside the allow-list.

    The allow-list is ASCII letters and digits, space, comma, period, dash,
    colon, percent sign and the configured currency symbols. Dashes are kept
    because document numbers such as SEL-00123 depend on them.
    """

    def __init__(self, currency_symbols: Optional[Iterable[str]] = None):
        symbols = tuple(currency_symbols) if currency_symbols is not None else DEFAULT_CURRENCY_SYMBOLS
        self.currency_symbols = symbols
        self._disallowed = re.compile(
            r'[^A-Za-z0-9 ,.\-:%' + ''.join(re.escape(s) for s in symbols) + r']'
        )

    def normalize(self, text: Optional[str]) -> str:
        """
        Normalize raw OCR text.

        Args:
            text: Raw text from the OCR service

        Returns:
            Single-line text with only allowed characters
        """
        if not text:
            return ""

        cleaned = WHITESPACE_RUN.sub(' ', text)
        cleaned = NEWLINES.sub(' ', cleaned)
        cleaned = self._disallowed.sub(' ', cleaned)
        cleaned = WHITESPACE_RUN.sub(' ', cleaned)
        return cleaned.strip()


def normalize_text(text: Optional[str]) -> str:
    """Normalize text with the default allow-list."""
    return TextNormalizer().normalize(text)
