"""
Unit tests for post-processing of extracted values.
"""

import logging

import pytest

from extraction.config import ExtractionConfig
from extraction.models import LineItem
from extraction.post_processor import PostProcessor, strip_trailing_artifacts, to_number


class TestToNumber:
    """Test cases for numeric coercion."""

    @pytest.mark.parametrize("value,expected", [
        ("₹1,234.50", 1234.50),
        ("1,234.50", 1234.50),
        (" 42 ", 42.0),
        ("105.00", 105.0),
        (12.5, 12.5),
        (7, 7.0),
    ])
    def test_parses_amounts(self, value, expected):
        """Test currency, separators and whitespace handling."""
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "NaN", "Infinity", "1.2.3", True])
    def test_invalid_values_use_default(self, value):
        """Test that unparseable input yields the default."""
        assert to_number(value) == 0.0
        assert to_number(value, default=-1) == -1

    def test_idempotent(self):
        """Test that coercing an already clean number changes nothing."""
        once = to_number("1,234.50")
        assert to_number(once) == once
        assert to_number(str(once)) == once

    def test_custom_currency_symbols(self):
        """Test stripping configured symbols."""
        assert to_number("$99.90", currency_symbols=['$']) == 99.90


class TestStripTrailingArtifacts:
    """Test cases for trailing artifact removal."""

    def test_single_artifact(self):
        """Test removing one trailing word."""
        assert strip_trailing_artifacts("John Doe Phone", [r'\bPhone\b']) == "John Doe"

    def test_repeats_until_stable(self):
        """Test that stacked artifacts are all removed."""
        patterns = [r'\bPhone\b', r'\bMobile\b']
        assert strip_trailing_artifacts("John Doe Phone Mobile Phone", patterns) == "John Doe"

    def test_artifact_inside_value_is_kept(self):
        """Test that only trailing occurrences are removed."""
        assert strip_trailing_artifacts("Phone House Ltd", [r'\bPhone\b']) == "Phone House Ltd"


class TestPostProcessor:
    """Test cases for PostProcessor class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.processor = PostProcessor()

    def test_clean_name(self):
        """Test name cleanup."""
        assert self.processor.clean_name("John  Doe Phone") == "John Doe"
        assert self.processor.clean_name("") == ""

    def test_clean_address(self):
        """Test address artifacts and comma spacing."""
        assert self.processor.clean_address("12 Main St, Zurich 0 LTE") == "12 Main St, Zurich"
        assert self.processor.clean_address("12 Main St ,Zurich LTE") == "12 Main St, Zurich"

    def test_clean_notes(self):
        """Test notes artifacts."""
        assert self.processor.clean_notes("Thanks Share Lens") == "Thanks"
        assert self.processor.clean_notes("Thanks,see you Share") == "Thanks, see you"

    def test_clean_document_number(self):
        """Test stripping characters outside the document number alphabet."""
        assert self.processor.clean_document_number("SEL-001;") == "SEL-001"
        assert self.processor.clean_document_number(" PB/2025 ") == "PB/2025"

    def test_short_document_number_is_kept_with_warning(self, caplog):
        """Test that a short document number is kept and a warning logged."""
        with caplog.at_level(logging.WARNING, logger='extraction.post_processor'):
            assert self.processor.clean_document_number("A1") == "A1"
        assert "looks incomplete" in caplog.text

    def test_process_builds_document(self):
        """Test assembling a document from raw values."""
        document = self.processor.process({
            'document_number': 'SEL-00123',
            'document_date': '2024-01-15',
            'party_name': 'John Doe Phone',
            'party_phone': '9876543210',
            'party_address': '12 Main St LTE',
            'notes': 'Thanks Share',
            'subtotal': '1,234.50',
            'total_tax': '',
            'total': 'oops',
            'items': []
        })

        assert document.party_name == "John Doe"
        assert document.party_address == "12 Main St"
        assert document.notes == "Thanks"
        assert document.subtotal == 1234.50
        assert document.total_tax == 0
        assert document.total == 0

    def test_totals_default_to_zero(self):
        """Test that totals not printed on the bill stay 0."""
        document = self.processor.process({'items': [LineItem('Charger', 10, 10, 5)]})
        assert (document.subtotal, document.total_tax, document.total) == (0, 0, 0)

    def test_missing_totals_are_derived(self):
        """Test totals derived from items when enabled and none were printed."""
        processor = PostProcessor(ExtractionConfig(compute_missing_totals=True))
        items = [LineItem('Charger', 10, 10, 5), LineItem('Pen', 2, 5, 0)]
        document = processor.process({'items': items})

        assert document.subtotal == 110.0
        assert document.total_tax == 5.0
        assert document.total == 115.0

    def test_derived_total_matches_captured_amounts(self):
        """Test that a captured line amount wins over the default tax percentage."""
        processor = PostProcessor(ExtractionConfig(compute_missing_totals=True))
        items = [LineItem('Item 1', 10, 10, 18, amount='105.00')]
        document = processor.process({'items': items})

        assert document.subtotal == 100.0
        assert document.total_tax == 5.0
        assert document.total == 105.0

    def test_printed_totals_are_kept(self):
        """Test that printed totals are not overwritten."""
        processor = PostProcessor(ExtractionConfig(compute_missing_totals=True))
        items = [LineItem('Charger', 10, 10, 5)]
        document = processor.process({'items': items, 'subtotal': '90', 'total': '95'})

        assert document.subtotal == 90.0
        assert document.total == 95.0
        assert document.total_tax == 5.0
