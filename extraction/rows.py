"""
Adapters for line item rows coming from upstream sources.

Rows already stored on a bill (or produced by other tools) arrive in mixed
shapes: positional lists, dictionaries with varying key names, single
element wrappers, or nothing at all. Each row is classified into one
variant of RawRow and converted by the adapter for that variant.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .models import LineItem

logger = logging.getLogger(__name__)

DESCRIPTION_KEYS = ('description', 'name', 'itemName')
QUANTITY_KEYS = ('quantity', 'qty')
RATE_KEYS = ('rate', 'price')
TAX_KEYS = ('taxPct', 'gstPct', 'gst')
AMOUNT_KEYS = ('amount', 'total')


@dataclass
class TupleRow:
    """Positional row: description, quantity, rate[, tax_pct[, amount]]."""
    values: Tuple[Any, ...] = ()


@dataclass
class FieldsRow:
    """Keyed row with any of the accepted key spellings."""
    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EmptyRow:
    """Row with no usable content."""


RawRow = Union[TupleRow, FieldsRow, EmptyRow]


def classify_row(raw: Any) -> RawRow:
    """
    Classify arbitrary upstream row data.

    Single-element lists or tuples wrapping another row are unwrapped.

    Args:
        raw: Row data of unknown shape

    Returns:
        The matching RawRow variant
    """
    while isinstance(raw, (list, tuple)) and len(raw) == 1 and isinstance(raw[0], (list, tuple, dict)):
        raw = raw[0]

    if isinstance(raw, LineItem):
        return FieldsRow(raw.to_dict())
    if isinstance(raw, dict):
        return FieldsRow(dict(raw)) if raw else EmptyRow()
    if isinstance(raw, (list, tuple)):
        return TupleRow(tuple(raw)) if raw else EmptyRow()
    return EmptyRow()


def _first_key(fields: Dict[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if key in fields and fields[key] not in (None, ''):
            return fields[key]
    return None


def adapt_tuple_row(row: TupleRow) -> Optional[LineItem]:
    values = list(row.values)
    if len(values) < 3:
        return None
    values.extend([None] * (5 - len(values)))
    description, quantity, rate, tax_pct, amount = values[:5]
    return LineItem(
        description=str(description or ''),
        quantity=quantity,
        rate=rate,
        tax_pct=tax_pct,
        amount=amount
    )


def adapt_fields_row(row: FieldsRow) -> Optional[LineItem]:
    fields = row.fields
    description = _first_key(fields, DESCRIPTION_KEYS)
    if description is None:
        return None
    return LineItem(
        description=str(description),
        quantity=_first_key(fields, QUANTITY_KEYS),
        rate=_first_key(fields, RATE_KEYS),
        tax_pct=_first_key(fields, TAX_KEYS),
        amount=_first_key(fields, AMOUNT_KEYS)
    )


def adapt_row(raw: Any) -> Optional[LineItem]:
    """
    Convert one upstream row into a LineItem.

    Returns:
        LineItem, or None when the row is empty or fails the item invariant
    """
    row = classify_row(raw)
    if isinstance(row, TupleRow):
        item = adapt_tuple_row(row)
    elif isinstance(row, FieldsRow):
        item = adapt_fields_row(row)
    else:
        item = None

    if item is None or not item.is_valid():
        logger.debug(f"Dropping unusable row: {raw!r}")
        return None
    return item


def adapt_rows(rows: Iterable[Any]) -> List[LineItem]:
    """Convert upstream rows, dropping the ones that are not usable."""
    items = []
    for raw in rows or []:
        item = adapt_row(raw)
        if item is not None:
            items.append(item)
    return items


def merge_items(existing: Iterable[Any], extracted: Iterable[LineItem]) -> List[LineItem]:
    """
    Merge extracted items into an existing item list.

    Existing rows are adapted first and kept in order. Extracted items are
    appended unless an item with the same description (case-insensitive)
    is already present.

    Args:
        existing: Upstream rows of any supported shape
        extracted: Items produced by the extractor

    Returns:
        Merged item list
    """
    merged = adapt_rows(existing)
    seen = {item.description.lower() for item in merged}

    for item in extracted:
        key = item.description.lower()
        if key in seen:
            logger.debug(f"Skipping duplicate item: {item.description}")
            continue
        seen.add(key)
        merged.append(item)

    return merged
