"""
Bill Text Extraction Module.

This module turns raw OCR text of invoices and purchase bills into a
structured record: document number, date, counterparty details, line
items, totals and notes.
"""

from .document_parser import DocumentParser, extract
from .models import ParsedDocument, LineItem, Candidate
from .config import ExtractionConfig, ScoringWeights, CatalogItem, load_config
from .normalizer import TextNormalizer, normalize_text
from .document_number import DocumentNumberExtractor, score_candidate
from .line_items import LineItemExtractor
from .post_processor import PostProcessor, to_number
from .rows import classify_row, adapt_rows, merge_items
from .exceptions import ExtractionError, ConfigurationError

__all__ = [
    'DocumentParser',
    'extract',
    'ParsedDocument',
    'LineItem',
    'Candidate',
    'ExtractionConfig',
    'ScoringWeights',
    'CatalogItem',
    'load_config',
    'TextNormalizer',
    'normalize_text',
    'DocumentNumberExtractor',
    'score_candidate',
    'LineItemExtractor',
    'PostProcessor',
    'to_number',
    'classify_row',
    'adapt_rows',
    'merge_items',
    'ExtractionError',
    'ConfigurationError'
]
