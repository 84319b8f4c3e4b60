"""
Tests for the end-to-end bill text parser.
"""

from unittest.mock import Mock

import pytest

from extraction.config import ExtractionConfig
from extraction.document_parser import DocumentParser, extract
from extraction.models import ParsedDocument


SAMPLE_BILL = """INVOICE
Invoice Number: SEL-00123
Invoice Date: 2024-01-15
Customer Name: John Doe
Phone: 9876543210
Address: 12 Main Street, Zurich Switzerland
DESCRIPTION QUANTITY RATE AMOUNT
Charger GST 5% 10 10 105.00
Bottle GST 18% 2 50 118.00
SubTotal: ₹200.00
Total GST: ₹23.00
Total: ₹223.00
Notes: Thank you for your business
Share Lens
"""


class TestDocumentParser:
    """Test cases for DocumentParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = DocumentParser()

    def test_parser_initialization(self):
        """Test DocumentParser initialization."""
        assert self.parser.logger is not None
        assert isinstance(self.parser.config, ExtractionConfig)

    def test_full_bill(self):
        """Test every field of a complete bill."""
        document = self.parser.parse(SAMPLE_BILL)

        assert document.document_number == "SEL-00123"
        assert document.document_date == "2024-01-15"
        assert document.party_name == "John Doe"
        assert document.party_phone == "9876543210"
        assert document.party_address == "12 Main Street, Zurich Switzerland"
        assert [item.description for item in document.items] == ["Charger", "Bottle"]
        assert document.subtotal == 200.0
        assert document.total_tax == 23.0
        assert document.total == 223.0
        assert document.notes == "Thank you for your business"

    def test_deterministic(self):
        """Test that the same input always gives the same record."""
        first = self.parser.parse(SAMPLE_BILL).to_dict()
        second = self.parser.parse(SAMPLE_BILL).to_dict()
        assert first == second
        assert extract(SAMPLE_BILL).to_dict() == first

    @pytest.mark.parametrize("text", ["", "   \n\t ", None])
    def test_empty_input(self, text):
        """Test that empty input yields an all-default record."""
        assert self.parser.parse(text) == ParsedDocument()

    def test_garbage_input_never_raises(self):
        """Test that noise produces a record rather than an error."""
        document = self.parser.parse("@@@ ### \x00 ☃ ]]] ;;;")
        assert isinstance(document, ParsedDocument)
        assert document.items == []

    def test_absent_fields_default_to_empty(self):
        """Test that fields not present stay empty."""
        document = extract("Charger GST 5% 10 10 105.00")
        assert document.party_name == ""
        assert document.party_phone == ""
        assert document.party_address == ""
        assert document.notes == ""
        assert document.document_date == ""

    @pytest.mark.parametrize("text", ["SEL 001234", "SEL-001234"])
    def test_prefix_document_number(self, text):
        """Test the vendor prefix form through the whole pipeline."""
        assert extract(text).document_number == "SEL-001234"

    def test_labeled_document_number(self):
        """Test the labeled form through the whole pipeline."""
        assert extract("Invoice Number: INV-2024-001").document_number == "INV-2024-001"

    def test_scored_document_number(self):
        """Test scored disambiguation through the whole pipeline."""
        assert extract("Ref PB-2025-001 issued 2024").document_number == "PB-2025-001"

    def test_single_table_item(self):
        """Test a single GST row."""
        document = extract("Charger GST 5% 10 10 105.00")

        assert len(document.items) == 1
        assert document.items[0].to_dict() == {
            'description': 'Charger',
            'quantity': 10.0,
            'rate': 10.0,
            'taxPct': 5.0,
            'amount': 105.0
        }

    def test_generic_fallback(self):
        """Test that a bare triple becomes a generic item."""
        document = extract("Values: 10 10 105.00")
        assert [item.description for item in document.items] == ["Item 1"]

    def test_subtotal_with_currency(self):
        """Test currency and thousands separator coercion."""
        document = extract("SubTotal: ₹1,234.50")
        assert document.subtotal == 1234.50
        assert document.total == 0

    def test_unprinted_totals_stay_zero(self):
        """Test that totals the bill does not print are left at 0."""
        document = extract("Charger GST 5% 10 10 105.00")
        assert document.subtotal == 0
        assert document.total_tax == 0
        assert document.total == 0

    def test_totals_derived_from_items_when_enabled(self):
        """Test opt-in totals computed from the items."""
        config = ExtractionConfig(compute_missing_totals=True)
        document = extract("Charger GST 5% 10 10 105.00", config)
        assert document.subtotal == 100.0
        assert document.total_tax == 5.0
        assert document.total == 105.0

    def test_derived_totals_agree_with_generic_item(self):
        """Test that a generic item's captured amount drives the derived total."""
        config = ExtractionConfig(compute_missing_totals=True)
        document = extract("10 10 105.00", config)
        assert document.items[0].amount == 105.0
        assert document.total == 105.0

    def test_items_satisfy_invariant(self):
        """Test that every item has positive quantity and rate and a real description."""
        keywords = self.parser.config.item_header_keywords
        for item in self.parser.parse(SAMPLE_BILL).items:
            assert item.is_valid(keywords)

    def test_failing_extractor_does_not_affect_others(self):
        """Test that one extractor failure leaves only its field at the default."""
        self.parser.field_extractors['party_phone'] = Mock(
            extract=Mock(side_effect=RuntimeError("boom"))
        )
        document = self.parser.parse(SAMPLE_BILL)

        assert document.party_phone == ""
        assert document.document_number == "SEL-00123"
        assert document.party_name == "John Doe"

    def test_failing_line_items_keep_empty_list(self):
        """Test that a waterfall failure leaves items empty."""
        self.parser.line_item_extractor = Mock(
            extract=Mock(side_effect=ValueError("bad"))
        )
        document = self.parser.parse(SAMPLE_BILL)

        assert document.items == []
        assert document.total == 223.0

    def test_custom_configuration(self):
        """Test a parser built with a custom configuration."""
        parser = DocumentParser(ExtractionConfig(document_prefix='INV'))
        assert parser.parse("INV 4521").document_number == "INV-4521"

    def test_injected_logger(self):
        """Test that an injected logger is used."""
        logger = Mock()
        DocumentParser(logger=logger).parse(SAMPLE_BILL)
        assert logger.debug.called
