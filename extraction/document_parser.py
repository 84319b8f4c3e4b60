"""
Bill text parser.

DocumentParser ties the pipeline together: the raw OCR text is normalized
once, every field extractor and the line item waterfall run against that
same string, and the post-processor assembles the final record.
"""

import logging
from typing import Any, Callable, Dict, Optional

from .config import ExtractionConfig
from .document_number import DocumentNumberExtractor
from .field_extractors import (
    AddressExtractor,
    DateExtractor,
    NotesExtractor,
    PartyNameExtractor,
    PhoneExtractor,
    TotalsExtractor
)
from .line_items import LineItemExtractor
from .models import ParsedDocument
from .normalizer import TextNormalizer
from .post_processor import PostProcessor


class DocumentParser:
    """
    Parses raw bill text into a ParsedDocument.

    The parser holds no per-document state; one instance can be shared
    and reused for any number of documents.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize DocumentParser.

        Args:
            config: Extraction configuration. Defaults to ExtractionConfig().
            logger: Optional logger instance
        """
        self.config = config or ExtractionConfig()
        self.logger = logger or logging.getLogger(__name__)

        self.normalizer = TextNormalizer(self.config.currency_symbols)
        self.field_extractors = {
            'document_number': DocumentNumberExtractor(self.config),
            'document_date': DateExtractor(self.config),
            'party_name': PartyNameExtractor(self.config),
            'party_phone': PhoneExtractor(self.config),
            'party_address': AddressExtractor(self.config),
            'notes': NotesExtractor(self.config),
        }
        self.totals_extractor = TotalsExtractor(self.config)
        self.line_item_extractor = LineItemExtractor(self.config)
        self.post_processor = PostProcessor(self.config)

    def parse(self, raw_text: Optional[str]) -> ParsedDocument:
        """
        Parse raw OCR text.

        Args:
            raw_text: Text as returned by the OCR service

        Returns:
            ParsedDocument; fields that could not be found keep their defaults
        """
        text = self.normalizer.normalize(raw_text)
        self.logger.debug(f"Normalized text ({len(text)} chars): {text[:200]}")

        if not text:
            self.logger.info("Empty text, nothing to extract")
            return ParsedDocument()

        raw: Dict[str, Any] = {}
        for name, extractor in self.field_extractors.items():
            raw[name] = self._run(name, extractor.extract, text, "")

        raw.update(self._run('totals', self.totals_extractor.extract, text, {}))
        raw['items'] = self._run('items', self.line_item_extractor.extract, text, [])

        document = self.post_processor.process(raw)

        missing = document.missing_fields()
        if missing:
            self.logger.info(f"Fields not found: {', '.join(missing)}")
        self.logger.debug(f"Parsed document: {document.to_dict()}")
        return document

    def _run(self, name: str, extract: Callable[[str], Any], text: str, default: Any) -> Any:
        """Run one extractor; a failure leaves that field at its default."""
        try:
            return extract(text)
        except Exception as e:
            self.logger.error(f"Extraction of {name} failed: {e}", exc_info=True)
            return default


def extract(raw_text: Optional[str], config: Optional[ExtractionConfig] = None) -> ParsedDocument:
    """
    Parse raw bill text with a one-off parser.

    Args:
        raw_text: Text as returned by the OCR service
        config: Optional extraction configuration

    Returns:
        ParsedDocument
    """
    return DocumentParser(config).parse(raw_text)
