"""Document extraction module.

This module builds validated Document objects from dictionaries,
JSON strings and JSON files. It is the validation layer in front of
the calculator, which assumes well-formed numeric input.
"""

import json
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .models import (
    DISCOUNT_TYPES,
    DOCUMENT_TYPES,
    ROUNDING_POLICIES,
    AdditionalCharge,
    BankDetails,
    Discount,
    Document,
    LineItem,
    OutputOptions,
    Party,
    TaxComponent,
)

_CURRENCY_NOISE = re.compile(r'[₹$€£,\s]')
_CURRENCY_CODE = re.compile(r'^(?:INR|Rs\.?)', re.IGNORECASE)


def _require_object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be an object")
    return value


class DocumentExtractor:
    """Extracts structured billing documents from raw data.

    This class provides methods to parse document data from various
    formats and validate line items, taxes, discounts and charges.
    """

    def extract_from_dict(self, data: dict[str, Any]) -> Document:
        """Extract a document from a dictionary representation.

        Args:
            data: Dictionary containing document data with keys:
                - document_type: "invoice", "quotation" or "bill"
                - doc_no: Document number
                - doc_date: Issue date
                - line_items: List of line item dicts
                - shipping: Optional shipping amount
                - additional_charges: Optional list of charge dicts
                - rounding: Optional rounding policy
                - company, bill_to, bank_details, outputs: Optional dicts
                - due_date, valid_until, notes, terms: Optional metadata

        Returns:
            A Document object with extracted data.

        Raises:
            ValueError: If required fields are missing or invalid.
        """
        if not isinstance(data, dict):
            raise ValueError("Document data must be an object")
        if not data.get('doc_no'):
            raise ValueError("doc_no is required")
        if not data.get('doc_date'):
            raise ValueError("doc_date is required")

        document_type = data.get('document_type') or 'invoice'
        if document_type not in DOCUMENT_TYPES:
            raise ValueError(f"Invalid document_type: {document_type}")

        rounding = data.get('rounding') or 'nearest'
        if rounding not in ROUNDING_POLICIES:
            raise ValueError(f"Invalid rounding policy: {rounding}")

        return Document(
            document_type=document_type,
            doc_no=str(data['doc_no']),
            doc_date=str(data['doc_date']),
            line_items=self._extract_line_items(data.get('line_items') or []),
            shipping=self._parse_amount(data.get('shipping', 0)),
            additional_charges=self._extract_additional_charges(
                data.get('additional_charges') or []
            ),
            rounding=rounding,
            due_date=data.get('due_date') or None,
            valid_until=data.get('valid_until') or None,
            company=self._extract_party(data.get('company'), "company"),
            bill_to=self._extract_party(data.get('bill_to'), "bill_to"),
            notes=data.get('notes') or None,
            terms=[str(term) for term in data.get('terms') or []],
            bank_details=self._extract_bank_details(data.get('bank_details')),
            outputs=self._extract_outputs(data.get('outputs')),
        )

    def extract_from_json(self, json_str: str) -> Document:
        """Extract a document from a JSON string.

        Raises:
            ValueError: If JSON is invalid or data is missing.
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}") from e

        return self.extract_from_dict(data)

    def extract_from_json_file(self, file_path: str) -> Document:
        """Extract a document from a JSON file.

        Raises:
            ValueError: If file contains invalid data.
            FileNotFoundError: If file does not exist.
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            return self.extract_from_json(f.read())

    def _extract_line_items(self, items_data: list[dict]) -> list[LineItem]:
        """Extract line items from a list of dictionaries.

        Args:
            items_data: List of dictionaries with line item data.

        Returns:
            List of LineItem objects.
        """
        line_items = []
        for index, item in enumerate(items_data, start=1):
            item = _require_object(item, f"Line item {index}")
            description = item.get('description', '')
            if not description:
                raise ValueError(f"Line item {index}: description is required")

            line_items.append(LineItem(
                description=description,
                quantity=self._parse_amount(item.get('quantity', 1)),
                unit=item.get('unit', ''),
                unit_price=self._parse_amount(item.get('unit_price', 0)),
                discount=self._extract_discount(item.get('discount'), index),
                tax=self._extract_taxes(item.get('tax') or [], index),
                hsn_sac=item.get('hsn_sac') or None,
            ))

        return line_items

    def _extract_discount(self, data: Optional[dict], index: int) -> Optional[Discount]:
        if not data:
            return None
        data = _require_object(data, f"Line item {index}: discount")
        discount_type = data.get('type', 'percent')
        if discount_type not in DISCOUNT_TYPES:
            raise ValueError(f"Line item {index}: invalid discount type: {discount_type}")
        return Discount(type=discount_type, value=self._parse_amount(data.get('value', 0)))

    def _extract_taxes(self, taxes_data: list[dict], index: int) -> list[TaxComponent]:
        taxes = []
        for tax in taxes_data:
            tax = _require_object(tax, f"Line item {index}: tax entry")
            name = tax.get('name', '')
            if not name:
                raise ValueError(f"Line item {index}: tax name is required")
            taxes.append(TaxComponent(name=name, rate=self._parse_amount(tax.get('rate', 0))))
        return taxes

    def _extract_additional_charges(self, charges_data: list[dict]) -> list[AdditionalCharge]:
        charges = []
        for index, charge in enumerate(charges_data, start=1):
            charge = _require_object(charge, f"Additional charge {index}")
            charges.append(AdditionalCharge(
                label=charge.get('label', 'Additional charge'),
                amount=self._parse_amount(charge.get('amount', 0))
            ))
        return charges

    @staticmethod
    def _extract_party(data: Optional[dict], what: str) -> Optional[Party]:
        if not data:
            return None
        data = _require_object(data, what)
        return Party(
            name=data.get('name', ''),
            address=data.get('address', ''),
            email=data.get('email', ''),
            phone=data.get('phone', ''),
            gst=data.get('gst') or None,
            tagline=data.get('tagline') or None,
            website=data.get('website') or None,
            logo_url=data.get('logo_url') or None,
        )

    @staticmethod
    def _extract_bank_details(data: Optional[dict]) -> Optional[BankDetails]:
        if not data:
            return None
        data = _require_object(data, "bank_details")
        return BankDetails(
            account_name=data.get('account_name', ''),
            bank=data.get('bank', ''),
            account_no=data.get('account_no', ''),
            ifsc=data.get('ifsc', ''),
            upi_id=data.get('upi_id') or None,
        )

    @staticmethod
    def _extract_outputs(data: Optional[dict]) -> OutputOptions:
        if not data:
            return OutputOptions()
        data = _require_object(data, "outputs")
        return OutputOptions(
            formats=list(data.get('formats') or ['json']),
            show_amount_in_words=bool(data.get('show_amount_in_words', True)),
            show_qr=bool(data.get('show_qr', False)),
        )

    @staticmethod
    def _parse_amount(value: Any) -> Decimal:
        """Parse a value into a finite Decimal amount.

        Handles strings with currency symbols, commas, etc.

        Args:
            value: The value to parse (string, int, float, or Decimal).

        Returns:
            Decimal representation of the value.

        Raises:
            ValueError: If value cannot be parsed or is not finite.
        """
        if isinstance(value, bool):
            raise ValueError(f"Unsupported type for amount: {type(value)}")

        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, (int, float)):
            amount = Decimal(str(value))
        elif isinstance(value, str):
            # Remove currency symbols, codes, separators and whitespace
            cleaned = _CURRENCY_NOISE.sub('', value)
            cleaned = _CURRENCY_CODE.sub('', cleaned)
            if not cleaned:
                return Decimal('0')
            try:
                amount = Decimal(cleaned)
            except InvalidOperation:
                raise ValueError(f"Cannot parse amount: {value}")
        else:
            raise ValueError(f"Unsupported type for amount: {type(value)}")

        if not amount.is_finite():
            raise ValueError(f"Amount must be finite: {value}")
        return amount
