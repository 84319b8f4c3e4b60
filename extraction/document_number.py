"""
Document number extraction.

Structured patterns are tried first (vendor prefix, then labeled forms).
When none match, the text is searched for a fragmented vendor prefix, and
as a last resort every plausible token is scored and the best one is kept.
"""

import logging
import re
from typing import List, Optional

from .cascade import first_match_indexed, pattern_matcher
from .config import ExtractionConfig, ScoringWeights
from .models import Candidate

logger = logging.getLogger(__name__)

LABELS = r'(?:Document|Invoice|Bill|Receipt)'
TOKEN = r'([A-Za-z0-9\-_/]+)'
CANDIDATE_TOKEN = re.compile(r'[A-Z0-9\-_/]{3,20}')

MIN_TOKEN_LENGTH = 3
MAX_LABELED_LENGTH = 20

# Candidates with these shapes are dates, phone numbers or years.
EXCLUDED_SHAPES = [
    re.compile(r'^\d{4}-\d{2}-\d{2}$'),
    re.compile(r'^\d{2}/\d{2}/\d{4}$'),
    re.compile(r'^\d{2}-\d{2}-\d{4}$'),
    re.compile(r'^\d{10,12}$'),
    re.compile(r'^(?:19|20)\d{2}$'),
]

HAS_LETTER = re.compile(r'[A-Za-z]')
HAS_DIGIT = re.compile(r'\d')
HAS_SEPARATOR = re.compile(r'[-_]')


def score_candidate(token: str, weights: Optional[ScoringWeights] = None) -> float:
    """
    Score how much a token looks like a document number.

    Args:
        token: Candidate token
        weights: Scoring weights, defaults to ScoringWeights()

    Returns:
        Numeric score, higher is more likely
    """
    weights = weights or ScoringWeights()
    score = 0.0

    if HAS_LETTER.search(token) and HAS_DIGIT.search(token):
        score += weights.alphanumeric
    if HAS_SEPARATOR.search(token):
        score += weights.separator
    if weights.min_reasonable_length <= len(token) <= weights.max_reasonable_length:
        score += weights.reasonable_length
    if len(token) > weights.max_token_length:
        score += weights.too_long
    if token[:1].isalpha():
        score += weights.leading_letter

    return score


class DocumentNumberExtractor:
    """
    Extracts the document (invoice/bill) number from normalized text.

    Priority:
        1. Vendor prefix form (SEL-00123, SEL 00123), rebuilt as PREFIX-digits
        2. Labeled forms (Invoice Number: ..., Bill No ..., Receipt ...)
        3. Fragmented vendor prefix anywhere in the text
        4. Scored disambiguation over all plausible tokens
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        self.prefix = self.config.document_prefix.upper()
        self._keywords = {keyword.upper() for keyword in self.config.candidate_keywords}

        escaped_prefix = re.escape(self.prefix)
        self.structured_matchers = [
            pattern_matcher(
                r'\b' + escaped_prefix + r'\s*-?\s*(\d{3,6})(?!\d)',
                re.IGNORECASE,
                transform=self._canonical
            ),
            pattern_matcher(
                r'\b' + LABELS + r'\s*(?:Number|No\b\.?|#)\s*[:\-]?\s*' + TOKEN,
                re.IGNORECASE,
                accept=self._acceptable_label_token
            ),
            pattern_matcher(
                r'\b' + LABELS + r'\b\s*[:\-]?\s*' + TOKEN,
                re.IGNORECASE,
                accept=lambda token: self._acceptable_label_token(token) and bool(HAS_DIGIT.search(token))
            ),
        ]

        # Prefix letters may be split by OCR spaces or glued to a previous word.
        # Case-sensitive so ordinary words (Diesel 500) are not taken.
        fragment_prefix = r'\s*'.join(re.escape(letter) for letter in self.prefix)
        self.fragment_matcher = pattern_matcher(
            fragment_prefix + r'\s*-?\s*(\d{3,6})(?!\d)',
            transform=self._canonical
        )

    def _canonical(self, match: re.Match) -> str:
        return f"{self.prefix}-{match.group(1)}"

    def _acceptable_label_token(self, token: str) -> bool:
        return (
            MIN_TOKEN_LENGTH <= len(token) <= MAX_LABELED_LENGTH and
            token.upper() not in self._keywords and
            token.upper() not in ('NUMBER', 'NO', 'DATE') and
            not any(shape.match(token) for shape in EXCLUDED_SHAPES)
        )

    def extract(self, text: str) -> str:
        """
        Extract the document number.

        Args:
            text: Normalized text

        Returns:
            Document number, or an empty string when nothing plausible is found
        """
        if not text:
            return ""

        value, index = first_match_indexed(text, self.structured_matchers)
        if value:
            logger.debug(f"Document number from structured pattern {index}: {value}")
            return value

        value = self.fragment_matcher(text)
        if value:
            logger.debug(f"Document number from fragmented prefix: {value}")
            return value

        best = self.best_candidate(text)
        if best:
            logger.debug(f"Document number from scored candidate: {best.token} (score {best.score})")
            return best.token

        return ""

    def collect_candidates(self, text: str) -> List[Candidate]:
        """
        Enumerate and score every plausible document number token.

        Args:
            text: Normalized text

        Returns:
            Candidates in scan order
        """
        candidates = []
        for position, match in enumerate(CANDIDATE_TOKEN.finditer(text)):
            token = match.group(0)
            if self._is_excluded(token):
                continue
            candidates.append(Candidate(
                token=token,
                score=score_candidate(token, self.config.scoring),
                position=position
            ))
        return candidates

    def best_candidate(self, text: str) -> Optional[Candidate]:
        """Return the highest scoring candidate; ties go to the earliest one."""
        best = None
        for candidate in self.collect_candidates(text):
            if best is None or candidate.score > best.score:
                best = candidate
        return best

    def _is_excluded(self, token: str) -> bool:
        if len(token) < MIN_TOKEN_LENGTH:
            return True
        if token.upper() in self._keywords:
            return True
        return any(shape.match(token) for shape in EXCLUDED_SHAPES)
