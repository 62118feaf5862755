"""Data models for billing documents and their calculations.

This module defines the input structures (documents, line items,
discounts, taxes, charges) and the computed breakdown the calculator
produces from them.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


DOCUMENT_TYPES = ('invoice', 'quotation', 'bill')
ROUNDING_POLICIES = ('nearest', 'up', 'down', 'none')
DISCOUNT_TYPES = ('percent', 'fixed')


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass
class TaxComponent:
    """A named tax applied to a line item.

    Attributes:
        name: Label used for aggregation (e.g., "CGST")
        rate: Percentage rate
    """
    name: str
    rate: Decimal

    def __post_init__(self):
        """Ensure rate is Decimal type."""
        self.rate = _to_decimal(self.rate)


@dataclass
class Discount:
    """A line-level discount.

    Attributes:
        type: Either "percent" (of the line subtotal) or "fixed"
        value: Percentage or absolute amount depending on type
    """
    type: str
    value: Decimal

    def __post_init__(self):
        """Ensure value is Decimal type."""
        self.value = _to_decimal(self.value)


@dataclass
class LineItem:
    """Represents a single billable entry in a document.

    Attributes:
        description: Description of the item/service
        quantity: Number of units
        unit: Unit label (e.g., "pcs", "hrs")
        unit_price: Price per unit, negative for credits
        discount: Optional line-level discount
        tax: Ordered tax components applied to the discounted base
        hsn_sac: Optional HSN/SAC classification code
    """
    description: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    discount: Optional[Discount] = None
    tax: list[TaxComponent] = field(default_factory=list)
    hsn_sac: Optional[str] = None

    def __post_init__(self):
        """Ensure all numeric fields are Decimal type."""
        self.quantity = _to_decimal(self.quantity)
        self.unit_price = _to_decimal(self.unit_price)


@dataclass
class AdditionalCharge:
    """A document-level charge added after tax."""
    label: str
    amount: Decimal

    def __post_init__(self):
        self.amount = _to_decimal(self.amount)


@dataclass
class Party:
    """Issuer or recipient of a document."""
    name: str
    address: str = ''
    email: str = ''
    phone: str = ''
    gst: Optional[str] = None
    tagline: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None


@dataclass
class BankDetails:
    account_name: str = ''
    bank: str = ''
    account_no: str = ''
    ifsc: str = ''
    upi_id: Optional[str] = None


@dataclass
class OutputOptions:
    """Presentation flags. Not used by the calculator."""
    formats: list[str] = field(default_factory=lambda: ['json'])
    show_amount_in_words: bool = True
    show_qr: bool = False


@dataclass
class Document:
    """Represents a complete billing document.

    Attributes:
        document_type: One of "invoice", "quotation" or "bill"
        doc_no: Document number
        doc_date: Issue date (ISO format)
        line_items: Ordered list of line items
        shipping: Untaxed document-level shipping amount
        additional_charges: Untaxed document-level charges
        rounding: Rounding policy for the grand total
        due_date: Optional payment due date
        valid_until: Optional validity date (quotations)
        company: Issuing party
        bill_to: Receiving party
        notes: Free-form notes
        terms: Terms and conditions lines
        bank_details: Payment details
        outputs: Presentation flags
    """
    document_type: str
    doc_no: str
    doc_date: str
    line_items: list[LineItem] = field(default_factory=list)
    shipping: Decimal = Decimal('0')
    additional_charges: list[AdditionalCharge] = field(default_factory=list)
    rounding: str = 'nearest'
    due_date: Optional[str] = None
    valid_until: Optional[str] = None
    company: Optional[Party] = None
    bill_to: Optional[Party] = None
    notes: Optional[str] = None
    terms: list[str] = field(default_factory=list)
    bank_details: Optional[BankDetails] = None
    outputs: OutputOptions = field(default_factory=OutputOptions)

    def __post_init__(self):
        """Ensure shipping is Decimal type."""
        self.shipping = _to_decimal(self.shipping)


@dataclass
class LineBreakdown:
    """Computed figures for one line item.

    Attributes:
        line_item: The source line item
        subtotal: quantity * unit_price
        discount_amount: Discount applied to the subtotal
        tax_amount: Sum of all tax components for the line
        total: subtotal - discount_amount + tax_amount
        tax_amounts: Per-component amounts, keyed by component name
    """
    line_item: LineItem
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total: Decimal
    tax_amounts: dict[str, Decimal] = field(default_factory=dict)

    @property
    def taxable_base(self) -> Decimal:
        return self.subtotal - self.discount_amount

    def to_dict(self) -> dict:
        item = self.line_item
        return {
            'description': item.description,
            'hsn_sac': item.hsn_sac,
            'quantity': str(item.quantity),
            'unit': item.unit,
            'unit_price': str(item.unit_price),
            'discount': (
                {'type': item.discount.type, 'value': str(item.discount.value)}
                if item.discount is not None else None
            ),
            'tax': [{'name': tax.name, 'rate': str(tax.rate)} for tax in item.tax],
            'subtotal': str(self.subtotal),
            'discount_amount': str(self.discount_amount),
            'tax_amount': str(self.tax_amount),
            'tax_amounts': {
                name: str(amount) for name, amount in self.tax_amounts.items()
            },
            'total': str(self.total),
        }


@dataclass
class Breakdown:
    """Full financial breakdown of a document.

    Derived data: recomputed in full by the calculator on every call.

    Attributes:
        line_items: Per-line figures in input order
        subtotal: Sum of line subtotals before discount
        total_discount: Sum of line discounts
        tax_breakdown: Tax amount per component name, in first-seen order
        total_tax: Sum of the tax breakdown
        shipping: Shipping amount, passed through
        additional_charges_total: Sum of additional charges
        subtotal_before_rounding: Grand total before rounding
        rounding_adjustment: grand_total - subtotal_before_rounding
        grand_total: Final rounded total
        amount_in_words: Grand total rendered in words
    """
    line_items: list[LineBreakdown] = field(default_factory=list)
    subtotal: Decimal = Decimal('0')
    total_discount: Decimal = Decimal('0')
    tax_breakdown: dict[str, Decimal] = field(default_factory=dict)
    total_tax: Decimal = Decimal('0')
    shipping: Decimal = Decimal('0')
    additional_charges_total: Decimal = Decimal('0')
    subtotal_before_rounding: Decimal = Decimal('0')
    rounding_adjustment: Decimal = Decimal('0')
    grand_total: Decimal = Decimal('0')
    amount_in_words: str = ''

    def to_dict(self) -> dict:
        """Convert breakdown to dictionary format.

        Returns:
            Dictionary representation with amounts as strings.
        """
        return {
            'line_items': [line.to_dict() for line in self.line_items],
            'subtotal': str(self.subtotal),
            'total_discount': str(self.total_discount),
            'tax_breakdown': {
                name: str(amount) for name, amount in self.tax_breakdown.items()
            },
            'total_tax': str(self.total_tax),
            'shipping': str(self.shipping),
            'additional_charges_total': str(self.additional_charges_total),
            'subtotal_before_rounding': str(self.subtotal_before_rounding),
            'rounding_adjustment': str(self.rounding_adjustment),
            'grand_total': str(self.grand_total),
            'amount_in_words': self.amount_in_words,
        }
