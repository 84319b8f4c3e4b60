"""
Line item extraction.

Items are found with a three-tier waterfall. A lower tier runs only when
every tier above it produced nothing:

    1. Table rows:    name [GST] [pct%] qty rate amount
    2. Known catalog: configured item names with their usual tax percentage
    3. Generic:       bare "qty rate amount" triples, described Item 1, Item 2, ...
"""

import logging
import re
from typing import List, Optional, Tuple

from .config import CatalogItem, ExtractionConfig
from .models import LineItem

logger = logging.getLogger(__name__)

TIER_TABLE = 'table'
TIER_CATALOG = 'catalog'
TIER_GENERIC = 'generic'

QTY = r'(\d+)'
DECIMAL = r'(\d+(?:\.\d+)?)'
PCT = r'(\d+(?:\.\d+)?)'


class LineItemExtractor:
    """
    Extracts line items from normalized bill text.

    Each tier returns items in scan order. Items failing the line item
    invariant (positive quantity and rate, meaningful description that is
    not a table header word) are skipped.
    """

    # Table row shapes, tried in order. Groups: name, [pct], qty, rate, amount
    TABLE_ROW_PATTERNS = [
        re.compile(r'\b([A-Za-z]+)\s+GST\s*' + PCT + r'\s*%\s*' + QTY + r'\s+' + DECIMAL + r'\s+' + DECIMAL + r'(?!\d)'),
        re.compile(r'\b([A-Za-z]+)\s+' + PCT + r'\s*%\s*' + QTY + r'\s+' + DECIMAL + r'\s+' + DECIMAL + r'(?!\d)'),
        re.compile(r'\b([A-Za-z]+)\s+' + QTY + r'\s+' + DECIMAL + r'\s+' + DECIMAL + r'(?!\d)'),
    ]

    GENERIC_TRIPLE = re.compile(r'(?<![\d.])' + QTY + r'\s+' + DECIMAL + r'\s+' + DECIMAL + r'(?!\d)')

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        self.header_keywords = list(self.config.item_header_keywords)

    def extract(self, text: str) -> List[LineItem]:
        """
        Extract line items.

        Args:
            text: Normalized text

        Returns:
            List of line items, possibly empty
        """
        items, _ = self.extract_with_tier(text)
        return items

    def extract_with_tier(self, text: str) -> Tuple[List[LineItem], Optional[str]]:
        """
        Extract line items and report which tier produced them.

        Returns:
            Tuple of (items, tier name or None when nothing was found)
        """
        if not text:
            return [], None

        tiers = [
            (TIER_TABLE, self.extract_table_rows),
            (TIER_CATALOG, self.extract_catalog_items),
            (TIER_GENERIC, self.extract_generic_items),
        ]

        for tier, extractor in tiers:
            items = extractor(text)
            if items:
                logger.info(f"Extracted {len(items)} line items using {tier} tier")
                return items, tier
            logger.debug(f"No line items from {tier} tier")

        logger.info("No line items found")
        return [], None

    def extract_table_rows(self, text: str) -> List[LineItem]:
        """Tier 1: rows with a name followed by the numeric columns."""
        items = []
        taken: List[Tuple[int, int]] = []

        for shape, pattern in enumerate(self.TABLE_ROW_PATTERNS):
            has_tax = shape < 2
            for match in pattern.finditer(text):
                if any(match.start() < end and start < match.end() for start, end in taken):
                    continue

                if has_tax:
                    name, tax_pct, quantity, rate, amount = match.groups()
                else:
                    name, quantity, rate, amount = match.groups()
                    tax_pct = 0

                item = LineItem(
                    description=re.sub(r'[^A-Za-z0-9 ]', '', name),
                    quantity=quantity,
                    rate=rate,
                    tax_pct=tax_pct,
                    amount=amount
                )
                if not item.is_valid(self.header_keywords):
                    logger.debug(f"Skipping table row candidate: {match.group(0)}")
                    continue

                taken.append(match.span())
                items.append(item)

        return items

    def extract_catalog_items(self, text: str) -> List[LineItem]:
        """Tier 2: known item names, at most one item per catalog entry."""
        items = []
        for entry in self.config.catalog:
            item = self._match_catalog_entry(text, entry)
            if item is not None:
                items.append(item)
        return items

    def _match_catalog_entry(self, text: str, entry: CatalogItem) -> Optional[LineItem]:
        name = re.escape(entry.name.strip())
        pct = re.escape(_format_pct(entry.tax_pct))
        columns = r'\s*' + QTY + r'\s+' + DECIMAL + r'\s+' + DECIMAL + r'(?!\d)'

        shapes = [
            r'\b' + name + r'\s+GST\s*' + pct + r'\s*%?' + columns,
            r'\b' + name + r'\s+' + pct + r'\s*%?' + columns,
            r'\b' + name + r'\s+' + columns,
        ]

        for shape in shapes:
            for match in re.finditer(shape, text, re.IGNORECASE):
                quantity, rate, amount = match.groups()
                item = LineItem(
                    description=entry.name,
                    quantity=quantity,
                    rate=rate,
                    tax_pct=entry.tax_pct,
                    amount=amount
                )
                if item.quantity > 0 and item.rate > 0:
                    return item
        return None

    def extract_generic_items(self, text: str) -> List[LineItem]:
        """Tier 3: bare numeric triples, capped by generic_item_cap."""
        items: List[LineItem] = []
        cap = self.config.generic_item_cap

        for match in self.GENERIC_TRIPLE.finditer(text):
            if len(items) >= cap:
                break
            quantity, rate, amount = match.groups()
            item = LineItem(
                description=f"Item {len(items) + 1}",
                quantity=quantity,
                rate=rate,
                tax_pct=self.config.default_tax_pct,
                amount=amount
            )
            if item.quantity > 0 and item.rate > 0:
                items.append(item)

        return items


def _format_pct(value: float) -> str:
    """Render a tax percentage the way it is printed on bills (5, not 5.0)."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)
