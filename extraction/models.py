"""
Data models for extracted bill information.

This module defines the data structures produced by the extraction engine:
the parsed document record, its line items, and the transient candidates
used while disambiguating document numbers.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import List, Dict, Any, Iterable, Optional


def _as_float(value: Any, default: float = 0.0) -> float:
    """Convert a numeric value or numeric string to float, falling back to default."""
    if value is None:
        return default
    try:
        return float(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError, TypeError):
        return default


@dataclass
class LineItem:
    """
    Represents a single line item of a bill.

    Attributes:
        description: Item description (e.g., Charger)
        quantity: Quantity, must be positive for the item to be kept
        rate: Unit rate, must be positive for the item to be kept
        tax_pct: Tax (GST) percentage applied to quantity * rate
        amount: Line amount, captured from the row or derived when missing
    """
    description: str = ""
    quantity: float = 0.0
    rate: float = 0.0
    tax_pct: float = 0.0
    amount: Optional[float] = None

    def __post_init__(self):
        """Normalize numeric fields and derive the amount if not provided."""
        self.description = (self.description or "").strip()
        self.quantity = _as_float(self.quantity)
        self.rate = _as_float(self.rate)
        self.tax_pct = _as_float(self.tax_pct)

        if self.amount is None:
            self.amount = self.calculate_amount()
        else:
            self.amount = _as_float(self.amount)

    def calculate_amount(self) -> float:
        """Calculate quantity * rate including tax."""
        subtotal = self.quantity * self.rate
        return round(subtotal * (1 + self.tax_pct / 100), 2)

    @property
    def net_amount(self) -> float:
        """Quantity * rate without tax."""
        return self.quantity * self.rate

    @property
    def tax_amount(self) -> float:
        """Tax portion of the line."""
        return self.net_amount * self.tax_pct / 100

    def is_valid(self, header_keywords: Iterable[str] = ()) -> bool:
        """
        Check the line item invariant.

        An item is valid if quantity and rate are positive and the
        description is longer than two characters and is not a known
        table header keyword.
        """
        keywords = {keyword.upper() for keyword in header_keywords}
        return (
            self.quantity > 0 and
            self.rate > 0 and
            len(self.description) > 2 and
            self.description.upper() not in keywords
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert line item to dictionary for serialization."""
        return {
            'description': self.description,
            'quantity': self.quantity,
            'rate': self.rate,
            'taxPct': self.tax_pct,
            'amount': self.amount
        }


@dataclass
class Candidate:
    """A provisional document number and its disambiguation score."""
    token: str
    score: float
    position: int = 0


@dataclass
class ParsedDocument:
    """
    Represents the structured record extracted from one bill's OCR text.

    Attributes:
        document_number: Document (invoice/bill) number, possibly empty
        document_date: ISO YYYY-MM-DD date or empty
        party_name: Counterparty (customer or supplier) name
        party_phone: Counterparty phone number
        party_address: Counterparty address
        items: Ordered line items
        subtotal: Sum before tax
        total_tax: Total tax (GST)
        total: Grand total
        notes: Free-text notes
    """
    document_number: str = ""
    document_date: str = ""
    party_name: str = ""
    party_phone: str = ""
    party_address: str = ""
    items: List[LineItem] = field(default_factory=list)
    subtotal: float = 0.0
    total_tax: float = 0.0
    total: float = 0.0
    notes: str = ""

    @property
    def is_document_number_incomplete(self) -> bool:
        """True when a document number was found but looks truncated."""
        return 0 < len(self.document_number) < 3

    def missing_fields(self) -> List[str]:
        """List record fields that are empty or zero and need manual entry."""
        missing = []
        for name, value in self.to_dict().items():
            if value in ("", 0, 0.0, []):
                missing.append(name)
        return missing

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to the JSON shape consumed by the form layer."""
        return {
            'documentNumber': self.document_number,
            'documentDate': self.document_date,
            'partyName': self.party_name,
            'partyPhone': self.party_phone,
            'partyAddress': self.party_address,
            'items': [item.to_dict() for item in self.items],
            'subtotal': self.subtotal,
            'totalTax': self.total_tax,
            'total': self.total,
            'notes': self.notes
        }
