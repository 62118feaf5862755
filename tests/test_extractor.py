"""Tests for document extraction."""

import json
import os
import tempfile
from decimal import Decimal

import pytest

from invoicecalc.extractor import DocumentExtractor
from invoicecalc.models import Discount, TaxComponent


class TestDocumentExtractor:
    """Tests for DocumentExtractor class."""

    @pytest.fixture
    def extractor(self):
        """Create a DocumentExtractor instance."""
        return DocumentExtractor()

    def test_extract_from_dict(self, extractor, sample_document_data):
        """Test extracting a document from a dictionary."""
        document = extractor.extract_from_dict(sample_document_data)

        assert document.document_type == 'invoice'
        assert document.doc_no == 'INV-001'
        assert document.doc_date == '2024-01-15'
        assert document.due_date == '2024-02-14'
        assert document.valid_until is None
        assert len(document.line_items) == 1
        assert document.shipping == Decimal('0')
        assert document.rounding == 'nearest'
        assert document.terms == ['Payment due within 30 days']

    def test_extract_line_items(self, extractor, sample_document_data):
        """Test line items are correctly extracted."""
        document = extractor.extract_from_dict(sample_document_data)
        item = document.line_items[0]

        assert item.description == 'Web Development'
        assert item.hsn_sac == '998314'
        assert item.quantity == Decimal('2')
        assert item.unit == 'hrs'
        assert item.unit_price == Decimal('5000')
        assert item.discount is None
        assert item.tax == [TaxComponent('CGST', Decimal('9')), TaxComponent('SGST', Decimal('9'))]

    def test_extract_parties_and_bank(self, extractor, sample_document_data):
        """Test company, customer and bank details are extracted."""
        document = extractor.extract_from_dict(sample_document_data)

        assert document.company.name == 'Acme Corp'
        assert document.company.gst == '29ABCDE1234F1Z5'
        assert document.bill_to.name == 'Globex Ltd'
        assert document.bill_to.gst is None
        assert document.bank_details.upi_id == 'acme@sbi'
        assert document.outputs.show_qr is True

    def test_extract_discount_and_charges(self, extractor, sample_document_data):
        """Test discounts, shipping and additional charges."""
        sample_document_data['line_items'][0]['discount'] = {'type': 'fixed', 'value': '500'}
        sample_document_data['shipping'] = '₹250'
        sample_document_data['additional_charges'] = [{'label': 'Packing', 'amount': 75.5}]

        document = extractor.extract_from_dict(sample_document_data)

        assert document.line_items[0].discount == Discount('fixed', Decimal('500'))
        assert document.shipping == Decimal('250')
        assert document.additional_charges[0].label == 'Packing'
        assert document.additional_charges[0].amount == Decimal('75.5')

    def test_defaults(self, extractor):
        """Test defaults for optional fields."""
        document = extractor.extract_from_dict({'doc_no': 'B-7', 'doc_date': '2024-03-01'})

        assert document.document_type == 'invoice'
        assert document.rounding == 'nearest'
        assert document.line_items == []
        assert document.company is None
        assert document.bank_details is None
        assert document.outputs.show_amount_in_words is True

    def test_extract_from_json(self, extractor, sample_document_data):
        """Test extracting a document from JSON string."""
        json_str = json.dumps(sample_document_data)
        document = extractor.extract_from_json(json_str)

        assert document.doc_no == 'INV-001'
        assert len(document.line_items) == 1

    def test_extract_from_json_file(self, extractor, sample_document_data):
        """Test extracting a document from JSON file."""
        with tempfile.NamedTemporaryFile(
            mode='w',
            suffix='.json',
            delete=False
        ) as f:
            json.dump(sample_document_data, f)
            temp_path = f.name

        try:
            document = extractor.extract_from_json_file(temp_path)
            assert document.doc_no == 'INV-001'
        finally:
            os.unlink(temp_path)

    def test_missing_file_raises_error(self, extractor):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            extractor.extract_from_json_file('/nonexistent/invoice.json')

    def test_missing_doc_no_raises_error(self, extractor):
        """Test that missing doc_no raises ValueError."""
        with pytest.raises(ValueError, match="doc_no is required"):
            extractor.extract_from_dict({'doc_date': '2024-01-15'})

    def test_missing_doc_date_raises_error(self, extractor):
        """Test that missing doc_date raises ValueError."""
        with pytest.raises(ValueError, match="doc_date is required"):
            extractor.extract_from_dict({'doc_no': 'INV-001'})

    def test_invalid_document_type_raises_error(self, extractor, sample_document_data):
        """Test that an unknown document type raises ValueError."""
        sample_document_data['document_type'] = 'receipt'

        with pytest.raises(ValueError, match="Invalid document_type"):
            extractor.extract_from_dict(sample_document_data)

    def test_invalid_rounding_raises_error(self, extractor, sample_document_data):
        """Test that an unknown rounding policy raises ValueError."""
        sample_document_data['rounding'] = 'bankers'

        with pytest.raises(ValueError, match="Invalid rounding policy"):
            extractor.extract_from_dict(sample_document_data)

    def test_invalid_discount_type_raises_error(self, extractor, sample_document_data):
        """Test that an unknown discount type raises ValueError."""
        sample_document_data['line_items'][0]['discount'] = {'type': 'bogo', 'value': 1}

        with pytest.raises(ValueError, match="invalid discount type"):
            extractor.extract_from_dict(sample_document_data)

    def test_missing_description_raises_error(self, extractor, sample_document_data):
        """Test that a line item without description raises ValueError."""
        sample_document_data['line_items'][0]['description'] = ''

        with pytest.raises(ValueError, match="Line item 1: description is required"):
            extractor.extract_from_dict(sample_document_data)

    def test_missing_tax_name_raises_error(self, extractor, sample_document_data):
        """Test that a tax component without a name raises ValueError."""
        sample_document_data['line_items'][0]['tax'] = [{'rate': 18}]

        with pytest.raises(ValueError, match="tax name is required"):
            extractor.extract_from_dict(sample_document_data)

    def test_non_object_line_item_raises_error(self, extractor, sample_document_data):
        """Test that a line item that is not an object raises ValueError."""
        sample_document_data['line_items'] = ['Web Development']

        with pytest.raises(ValueError, match="must be an object"):
            extractor.extract_from_dict(sample_document_data)

    def test_invalid_json_raises_error(self, extractor):
        """Test that invalid JSON raises ValueError."""
        with pytest.raises(ValueError, match="Invalid JSON"):
            extractor.extract_from_json("not valid json")

    def test_parse_amount_with_currency_symbol(self, extractor):
        """Test parsing amounts with currency symbols."""
        assert extractor._parse_amount("₹100.00") == Decimal('100.00')
        assert extractor._parse_amount("INR 50") == Decimal('50')

    def test_parse_amount_with_commas(self, extractor):
        """Test parsing amounts with Indian and western separators."""
        assert extractor._parse_amount("1,00,000.00") == Decimal('100000.00')
        assert extractor._parse_amount("1,234,567.89") == Decimal('1234567.89')

    def test_parse_amount_negative(self, extractor):
        """Test parsing negative amounts for credits."""
        assert extractor._parse_amount("-300") == Decimal('-300')
        assert extractor._parse_amount(-12.5) == Decimal('-12.5')

    def test_parse_amount_empty_string(self, extractor):
        """Test that an empty string parses as zero."""
        assert extractor._parse_amount("") == Decimal('0')

    def test_parse_amount_rejects_non_finite(self, extractor):
        """Test that NaN and infinity are rejected."""
        with pytest.raises(ValueError, match="finite"):
            extractor._parse_amount(float('nan'))
        with pytest.raises(ValueError, match="finite"):
            extractor._parse_amount(float('inf'))

    def test_parse_amount_rejects_unsupported_types(self, extractor):
        """Test that booleans and other types are rejected."""
        with pytest.raises(ValueError, match="Unsupported type"):
            extractor._parse_amount(True)
        with pytest.raises(ValueError, match="Unsupported type"):
            extractor._parse_amount([100])

    @pytest.mark.parametrize("value", ["nan", "NaN", "inf", "-Infinity", "₹ nan"])
    def test_parse_amount_rejects_non_finite_strings(self, extractor, value):
        """Test that NaN and infinity spelled as text are rejected."""
        with pytest.raises(ValueError, match="finite"):
            extractor._parse_amount(value)

    @pytest.mark.parametrize("value", ["abc", "12abc", "1.2.3", "ten rupees"])
    def test_parse_amount_rejects_text(self, extractor, value):
        """Test that leftover letters are rejected instead of dropped."""
        with pytest.raises(ValueError, match="Cannot parse amount"):
            extractor._parse_amount(value)

    def test_parse_amount_exponent(self, extractor):
        """Test that exponent notation keeps its value."""
        assert extractor._parse_amount("1e3") == Decimal('1000')

    def test_parse_amount_rupee_prefix(self, extractor):
        """Test the Rs. prefix is removed without leaving a decimal point."""
        assert extractor._parse_amount("Rs. 50") == Decimal('50')
        assert extractor._parse_amount("-₹1,500") == Decimal('-1500')

    @pytest.mark.parametrize("field, value, message", [
        ('tax', [18], "Line item 1: tax entry must be an object"),
        ('discount', 10, "Line item 1: discount must be an object"),
    ])
    def test_non_object_line_fields_raise_error(
        self, extractor, sample_document_data, field, value, message
    ):
        """Test that malformed taxes and discounts raise ValueError."""
        sample_document_data['line_items'][0][field] = value

        with pytest.raises(ValueError, match=message):
            extractor.extract_from_dict(sample_document_data)

    @pytest.mark.parametrize("field, value, message", [
        ('additional_charges', [5], "Additional charge 1 must be an object"),
        ('company', 'Acme', "company must be an object"),
        ('bill_to', ['Globex'], "bill_to must be an object"),
        ('bank_details', 'SBI', "bank_details must be an object"),
        ('outputs', ['json'], "outputs must be an object"),
    ])
    def test_non_object_document_fields_raise_error(
        self, extractor, sample_document_data, field, value, message
    ):
        """Test that malformed document sections raise ValueError."""
        sample_document_data[field] = value

        with pytest.raises(ValueError, match=message):
            extractor.extract_from_dict(sample_document_data)
