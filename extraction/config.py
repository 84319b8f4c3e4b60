"""
Configuration for the extraction engine.

Scoring weights, the known-item catalog, and the stop-word and artifact
vocabularies were tuned against sample bills. They are kept here as data so
they can be overridden from a JSON configuration file instead of editing the
extractors.
"""

import json
import logging
import re
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Dict, List, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class ScoringWeights:
    """Weights used to score document number candidates."""
    alphanumeric: float = 10        # contains both a letter and a digit
    separator: float = 5            # contains a dash or underscore
    reasonable_length: float = 3    # length within min/max_reasonable_length
    too_long: float = -5            # length above max_token_length
    leading_letter: float = 2       # starts with a letter
    min_reasonable_length: int = 5
    max_reasonable_length: int = 15
    max_token_length: int = 20


@dataclass
class CatalogItem:
    """A known item name and the tax percentage it is usually billed at."""
    name: str
    tax_pct: float = 0


def _default_catalog() -> List[CatalogItem]:
    return [
        CatalogItem('Charger', 5),
        CatalogItem('Bottle', 18),
        CatalogItem('Mouse', 12),
    ]


def _is_number(value: Any, integral: bool = False) -> bool:
    """True for int/float values (and only ints when integral); bools are rejected."""
    if isinstance(value, bool):
        return False
    return isinstance(value, int) if integral else isinstance(value, (int, float))


@dataclass
class ExtractionConfig:
    """
    Tunable data for every extractor.

    Attributes:
        document_prefix: Vendor prefix of structured document numbers (SEL-00123)
        scoring: Weights for document number disambiguation
        candidate_keywords: Tokens that are never document numbers
        item_header_keywords: Table header/footer words that are never item descriptions
        catalog: Known items tried when no table row matches
        default_tax_pct: Tax percentage given to generic (numeric-only) items
        generic_item_cap: Maximum number of generic items synthesized
        address_boundaries: Labels that end a captured address
        notes_boundaries: Labels that end captured notes
        notes_stop_patterns: Regular expressions that end captured notes
        name_artifacts: Trailing OCR artifacts removed from party names
        address_artifacts: Trailing OCR artifacts (regex) removed from addresses
        notes_artifacts: Trailing OCR artifacts (regex) removed from notes
        label_words: Label vocabulary never taken as a bare two-word name
        countries: Country names that end a bare address
        currency_symbols: Currency symbols preserved by the normalizer
        compute_missing_totals: Derive totals from items when not printed (off by default)
    """
    document_prefix: str = 'SEL'
    scoring: ScoringWeights = field(default_factory=ScoringWeights)
    candidate_keywords: List[str] = field(default_factory=lambda: [
        'INVOICE', 'BILL', 'RECEIPT', 'TOTAL', 'SUBTOTAL', 'GST',
        'AMOUNT', 'QUANTITY', 'RATE'
    ])
    item_header_keywords: List[str] = field(default_factory=lambda: [
        'INVOICE', 'DESCRIPTION', 'QUANTITY', 'RATE', 'AMOUNT', 'Notes',
        'Thank', 'GST', 'SubTotal', 'Total', 'Calculations', 'Item'
    ])
    catalog: List[CatalogItem] = field(default_factory=_default_catalog)
    default_tax_pct: float = 18
    generic_item_cap: int = 3
    address_boundaries: List[str] = field(default_factory=lambda: [
        'Phone', 'Mobile', 'GST', 'DESCRIPTION', 'Email', 'LTE'
    ])
    notes_boundaries: List[str] = field(default_factory=lambda: [
        'Share', 'Lens', 'LTE'
    ])
    notes_stop_patterns: List[str] = field(default_factory=lambda: [
        r'\d{1,2}:\d{2}'
    ])
    name_artifacts: List[str] = field(default_factory=lambda: [
        'Phone', 'Mobile', 'Address'
    ])
    address_artifacts: List[str] = field(default_factory=lambda: [
        r'0\s*LTE(?:\s*\$)?(?:\s*\])?(?:\s*;)?',
        r'LTE(?:\s*\$)?(?:\s*\])?(?:\s*;)?'
    ])
    notes_artifacts: List[str] = field(default_factory=lambda: [
        r'Share\s*Lens',
        r'Share'
    ])
    label_words: List[str] = field(default_factory=lambda: [
        'Invoice', 'Bill', 'Receipt', 'Document', 'Number', 'Date',
        'Customer', 'Supplier', 'Vendor', 'Party', 'Name', 'Phone',
        'Mobile', 'Address', 'Notes', 'Remarks', 'Terms', 'Total',
        'Subtotal', 'Tax', 'Amount', 'Rate', 'Quantity', 'Description',
        'Item', 'Items', 'Thank', 'Calculations', 'Purchase', 'Sale'
    ])
    countries: List[str] = field(default_factory=lambda: [
        'Switzerland', 'India', 'USA', 'UK', 'Canada'
    ])
    currency_symbols: List[str] = field(default_factory=lambda: ['₹'])
    compute_missing_totals: bool = False

    STRING_LIST_KEYS = (
        'candidate_keywords', 'item_header_keywords', 'address_boundaries',
        'notes_boundaries', 'notes_stop_patterns', 'name_artifacts',
        'address_artifacts', 'notes_artifacts', 'label_words', 'countries',
        'currency_symbols'
    )
    REGEX_LIST_KEYS = ('notes_stop_patterns', 'address_artifacts', 'notes_artifacts')

    def __post_init__(self):
        """Validate the configuration values."""
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If any value has the wrong type or is out of range
        """
        if not isinstance(self.document_prefix, str) or not self.document_prefix.isalpha():
            raise ConfigurationError(
                "Document prefix must be a non-empty alphabetic string",
                key='document_prefix'
            )

        if not _is_number(self.generic_item_cap, integral=True) or self.generic_item_cap < 0:
            raise ConfigurationError(
                "Generic item cap must be a non-negative integer",
                key='generic_item_cap'
            )

        if not _is_number(self.default_tax_pct) or self.default_tax_pct < 0:
            raise ConfigurationError(
                "Default tax percentage must be a non-negative number",
                key='default_tax_pct'
            )

        if not isinstance(self.compute_missing_totals, bool):
            raise ConfigurationError(
                "compute_missing_totals must be true or false",
                key='compute_missing_totals'
            )

        if not isinstance(self.scoring, ScoringWeights):
            raise ConfigurationError("Scoring must be a set of weights", key='scoring')
        for weight in fields(ScoringWeights):
            if not _is_number(getattr(self.scoring, weight.name)):
                raise ConfigurationError(
                    f"Scoring weight {weight.name} must be a number",
                    key='scoring'
                )

        for key in self.STRING_LIST_KEYS:
            values = getattr(self, key)
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise ConfigurationError(f"{key} must be a list of strings", key=key)

        for key in self.REGEX_LIST_KEYS:
            for pattern in getattr(self, key):
                try:
                    re.compile(pattern)
                except re.error as e:
                    raise ConfigurationError(
                        f"Invalid regular expression in {key}: {pattern!r} ({e})",
                        key=key,
                        original_error=e
                    ) from e

        for symbol in self.currency_symbols:
            if len(symbol) != 1:
                raise ConfigurationError(
                    f"Currency symbol must be a single character: {symbol!r}",
                    key='currency_symbols'
                )

        if not isinstance(self.catalog, list):
            raise ConfigurationError("Catalog must be a list of items", key='catalog')
        for item in self.catalog:
            if (not isinstance(item, CatalogItem) or not isinstance(item.name, str)
                    or not item.name.strip()):
                raise ConfigurationError(
                    "Catalog item names cannot be empty",
                    key='catalog'
                )
            if not _is_number(item.tax_pct) or item.tax_pct < 0:
                raise ConfigurationError(
                    f"Catalog tax percentage for {item.name} must be a non-negative number",
                    key='catalog'
                )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-serializable dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExtractionConfig':
        """
        Create a configuration from a (possibly partial) dictionary.

        Keys that are not present keep their default values.

        Raises:
            ConfigurationError: If the dictionary has unknown keys or bad values
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a JSON object")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                key=unknown[0]
            )

        values = dict(data)
        try:
            if 'scoring' in values and not isinstance(values['scoring'], ScoringWeights):
                values['scoring'] = ScoringWeights(**values['scoring'])
            if 'catalog' in values:
                values['catalog'] = [
                    item if isinstance(item, CatalogItem) else CatalogItem(**item)
                    for item in values['catalog']
                ]
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid configuration structure: {e}",
                original_error=e
            ) from e

        return cls(**values)


def load_config(path: Union[str, Path]) -> ExtractionConfig:
    """
    Load an extraction configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        ExtractionConfig with file values applied over the defaults

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    config_path = Path(path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file: {e}",
            source=str(config_path),
            original_error=e
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Configuration file is not valid JSON: {e}",
            source=str(config_path),
            original_error=e
        ) from e

    try:
        config = ExtractionConfig.from_dict(data)
    except ConfigurationError as e:
        e.source = str(config_path)
        e.details['source'] = str(config_path)
        raise

    logger.debug(f"Loaded extraction configuration from {config_path}")
    return config
