"""
Unit tests for header field extractors.
"""

from extraction.config import ExtractionConfig
from extraction.field_extractors import (
    AddressExtractor,
    DateExtractor,
    NotesExtractor,
    PartyNameExtractor,
    PhoneExtractor,
    TotalsExtractor
)
from extraction.normalizer import normalize_text


class TestDateExtractor:
    """Test cases for DateExtractor class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.extractor = DateExtractor()

    def test_labeled_iso_date(self):
        """Test a labeled ISO date."""
        assert self.extractor.extract("Invoice Date: 2024-01-15") == "2024-01-15"

    def test_labeled_date_has_priority(self):
        """Test that the labeled date wins over an earlier bare date."""
        text = "Due 2024-02-01 Invoice Date: 2024-01-15"
        assert self.extractor.extract(text) == "2024-01-15"

    def test_bare_iso_date(self):
        """Test an unlabeled ISO date."""
        assert self.extractor.extract("printed 2023-12-31 at shop") == "2023-12-31"

    def test_us_date_after_normalization(self):
        """Test MM/DD/YYYY once slashes were turned into spaces."""
        text = normalize_text("Date 01/15/2024")
        assert self.extractor.extract(text) == "2024-01-15"

    def test_us_date_with_slashes(self):
        """Test MM/DD/YYYY on text that still has slashes."""
        assert self.extractor.extract("on 03/07/2024") == "2024-03-07"

    def test_dashed_us_date(self):
        """Test MM-DD-YYYY."""
        assert self.extractor.extract("Date 01-15-2024") == "2024-01-15"

    def test_invalid_calendar_date_is_skipped(self):
        """Test that impossible dates are not emitted."""
        assert self.extractor.extract("Date 2024-13-45") == ""

    def test_invalid_date_falls_through_to_next(self):
        """Test that a later valid date is used when the first is impossible."""
        assert self.extractor.extract("2024-02-30 2024-02-28") == "2024-02-28"

    def test_no_date(self):
        """Test that an empty string is returned without a date."""
        assert self.extractor.extract("no date here") == ""
        assert self.extractor.extract("") == ""


class TestPartyNameExtractor:
    """Test cases for PartyNameExtractor class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.extractor = PartyNameExtractor()

    def test_customer_name_label(self):
        """Test the customer name label; trailing artifacts are left for post-processing."""
        value = self.extractor.extract("Customer Name: John Doe Phone: 9876543210")
        assert value.startswith("John Doe")

    def test_supplier_label(self):
        """Test the supplier label."""
        assert self.extractor.extract("Supplier: Acme Traders, Zurich") == "Acme Traders"

    def test_bill_to_label(self):
        """Test the bill-to label."""
        assert self.extractor.extract("Bill To: Ravi Kumar 12") == "Ravi Kumar"

    def test_bare_two_word_name(self):
        """Test the unlabeled two-word fallback."""
        text = "INVOICE SEL-001 Rahul Sharma 9876543210"
        assert self.extractor.extract(text) == "Rahul Sharma"

    def test_bare_name_skips_label_words(self):
        """Test that label vocabulary is never taken as a name."""
        text = "Invoice Date Priya Patel 2024-01-15"
        assert self.extractor.extract(text) == "Priya Patel"

    def test_bare_name_skips_catalog_items(self):
        """Test that known item names are not taken as a name."""
        assert self.extractor.extract("Charger Mouse 10 10") == ""

    def test_no_name(self):
        """Test that an empty string is returned without a name."""
        assert self.extractor.extract("SEL-001 2024-01-15") == ""


class TestPhoneExtractor:
    """Test cases for PhoneExtractor class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.extractor = PhoneExtractor()

    def test_labeled_phone(self):
        """Test a labeled phone number."""
        assert self.extractor.extract("Phone: 9876543210") == "9876543210"

    def test_labeled_phone_has_priority(self):
        """Test that a labeled number wins over an earlier bare one."""
        text = "Order 123456789012 Mobile 9123456780"
        assert self.extractor.extract(text) == "9123456780"

    def test_bare_phone(self):
        """Test an unlabeled 12-digit number."""
        assert self.extractor.extract("call 919876543210 now") == "919876543210"

    def test_embedded_digits_are_not_a_phone(self):
        """Test that a run inside a longer number is not taken."""
        assert self.extractor.extract("Account 98765432101234") == ""

    def test_short_number(self):
        """Test that fewer than ten digits is not a phone."""
        assert self.extractor.extract("Phone: 12345") == ""


class TestAddressExtractor:
    """Test cases for AddressExtractor class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.extractor = AddressExtractor()

    def test_labeled_address_until_phone(self):
        """Test the labeled block ending at the phone label."""
        text = "Address: 12 Main Street, Zurich Phone: 9876543210"
        assert self.extractor.extract(text) == "12 Main Street, Zurich"

    def test_labeled_address_until_gst(self):
        """Test the labeled block ending at the GST label."""
        text = "Address: 5 Lake Road Pune GST 27ABCDE"
        assert self.extractor.extract(text) == "5 Lake Road Pune"

    def test_bare_address_with_country(self):
        """Test the unlabeled address ending with a known country."""
        text = "Ship 221 Baker Street London UK thanks"
        assert self.extractor.extract(text) == "221 Baker Street London UK"

    def test_custom_countries(self):
        """Test that the country list comes from the configuration."""
        extractor = AddressExtractor(ExtractionConfig(countries=['Nepal']))
        assert extractor.extract("at 4 Durbar Marg Kathmandu Nepal") == "4 Durbar Marg Kathmandu Nepal"

    def test_no_address(self):
        """Test that an empty string is returned without an address."""
        assert self.extractor.extract("Phone 9876543210") == ""


class TestNotesExtractor:
    """Test cases for NotesExtractor class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.extractor = NotesExtractor()

    def test_notes_until_share_button(self):
        """Test that trailing share/lens chrome ends the notes."""
        text = "Notes: Thanks for your business Share Lens"
        assert self.extractor.extract(text) == "Thanks for your business"

    def test_notes_until_timestamp(self):
        """Test that a clock reading ends the notes."""
        assert self.extractor.extract("Notes: Deliver by Monday 10:45") == "Deliver by Monday"

    def test_remarks_label(self):
        """Test the remarks label."""
        assert self.extractor.extract("Remarks: Paid in cash") == "Paid in cash"

    def test_no_notes(self):
        """Test that an empty string is returned without notes."""
        assert self.extractor.extract("Total 100") == ""


class TestTotalsExtractor:
    """Test cases for TotalsExtractor class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.extractor = TotalsExtractor()

    def test_all_totals_with_currency(self):
        """Test subtotal, tax and total with rupee signs and separators."""
        text = "SubTotal: ₹1,234.50 Total GST: ₹61.73 Total: ₹1,296.23"
        assert self.extractor.extract(text) == {
            'subtotal': '1,234.50',
            'total_tax': '61.73',
            'total': '1,296.23'
        }

    def test_subtotal_does_not_feed_total(self):
        """Test that a SubTotal value is never read as the grand total."""
        assert self.extractor.extract("SubTotal: 100")['total'] == ""
        assert self.extractor.extract("Sub Total 500")['total'] == ""

    def test_grand_total(self):
        """Test the grand total label."""
        totals = self.extractor.extract("Sub Total 500 Tax Total 90 Grand Total 590")
        assert totals == {'subtotal': '500', 'total_tax': '90', 'total': '590'}

    def test_missing_totals(self):
        """Test that absent totals are empty strings."""
        assert self.extractor.extract("") == {'subtotal': '', 'total_tax': '', 'total': ''}
