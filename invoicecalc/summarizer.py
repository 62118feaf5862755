"""Document summarization module.

This module exposes computed breakdowns to their consumers: the JSON
export, a plain-text summary, and the UPI payment payload. It only
reads breakdowns; all arithmetic stays in the calculator.
"""

from dataclasses import asdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from urllib.parse import quote

from .calculator import DocumentCalculator
from .models import Breakdown, Document


def format_currency(amount: Decimal) -> str:
    """Format an amount as Indian Rupees with lakh/crore digit grouping.

    Example: Decimal('1234567.5') -> "₹12,34,567.50".
    """
    amount = Decimal(str(amount))
    if not amount.is_finite():
        return f"₹{amount}"
    amount = amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    sign = '-' if amount < 0 else ''
    whole, fraction = f"{abs(amount):.2f}".split('.')

    # Last three digits, then groups of two.
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ','.join(groups + [tail])

    return f"{sign}₹{grouped}.{fraction}"


def format_date(value: Optional[str]) -> str:
    """Format an ISO date as "05 Jan 2024"; other input is returned as is."""
    if not value:
        return ''
    try:
        return date.fromisoformat(value).strftime('%d %b %Y')
    except ValueError:
        return value


def upi_payment_uri(document: Document, breakdown: Breakdown) -> Optional[str]:
    """Build the UPI payment payload for a document.

    Returns:
        A upi://pay URI, or None when the document has no UPI id.
    """
    bank = document.bank_details
    if bank is None or not bank.upi_id:
        return None
    payee = document.company.name if document.company else ''
    return (
        f"upi://pay?pa={bank.upi_id}&pn={quote(payee)}"
        f"&am={breakdown.grand_total}&cu=INR"
    )


def _document_to_dict(document: Document) -> dict:
    data = asdict(document)

    def stringify(value):
        if isinstance(value, Decimal):
            return str(value)
        if isinstance(value, dict):
            return {k: stringify(v) for k, v in value.items()}
        if isinstance(value, list):
            return [stringify(v) for v in value]
        return value

    return stringify(data)


class DocumentSummarizer:
    """Summarizes billing documents from their computed breakdown.

    Args:
        calculator: Calculator used to compute breakdowns.
    """

    def __init__(self, calculator: Optional[DocumentCalculator] = None):
        self.calculator = calculator or DocumentCalculator()

    def summarize(self, document: Document) -> dict:
        """Generate the JSON export of a document.

        Args:
            document: The Document to summarize.

        Returns:
            The document data with its breakdown under "calculations".
        """
        breakdown = self.calculator.calculate(document)
        summary = _document_to_dict(document)
        summary['calculations'] = breakdown.to_dict()
        return summary

    def summarize_multiple(self, documents: list[Document]) -> dict:
        """Summarize multiple documents and combine their grand totals.

        Args:
            documents: List of Document objects to summarize.

        Returns:
            Dictionary with individual summaries and combined totals.
        """
        breakdowns = [self.calculator.calculate(doc) for doc in documents]

        combined_total = sum(
            (b.grand_total for b in breakdowns),
            Decimal('0')
        )

        return {
            'document_count': len(documents),
            'total_line_items': sum(len(b.line_items) for b in breakdowns),
            'combined_total': str(combined_total),
            'individual_summaries': [
                {**_document_to_dict(doc), 'calculations': b.to_dict()}
                for doc, b in zip(documents, breakdowns)
            ]
        }

    def get_formatted_summary(self, document: Document) -> str:
        """Generate a formatted text summary of the document.

        Args:
            document: The Document to summarize.

        Returns:
            Formatted string representation of the document totals.
        """
        breakdown = self.calculator.calculate(document)

        lines = [
            f"{document.document_type.upper()}: {document.doc_no}",
            f"{'=' * 50}",
            f"Date: {format_date(document.doc_date)}",
        ]
        if document.due_date:
            lines.append(f"Due Date: {format_date(document.due_date)}")
        if document.valid_until:
            lines.append(f"Valid Until: {format_date(document.valid_until)}")
        if document.company:
            lines.append(f"From: {document.company.name}")
        if document.bill_to:
            lines.append(f"Bill To: {document.bill_to.name}")

        lines.extend(["", "Line Items:", "-" * 50])
        for i, line in enumerate(breakdown.line_items, start=1):
            item = line.line_item
            entry = (
                f"  {i}. {item.description}: "
                f"{item.quantity} {item.unit} x {format_currency(item.unit_price)}"
            )
            if line.discount_amount:
                entry += f" less {format_currency(line.discount_amount)}"
            if line.tax_amount:
                entry += f" + tax {format_currency(line.tax_amount)}"
            entry += f" = {format_currency(line.total)}"
            lines.append(entry)

        lines.extend(["", "-" * 50])
        lines.append(f"Subtotal: {format_currency(breakdown.subtotal)}")
        if breakdown.total_discount:
            lines.append(f"Discount: {format_currency(-breakdown.total_discount)}")
        for name, amount in breakdown.tax_breakdown.items():
            lines.append(f"{name}: {format_currency(amount)}")
        if breakdown.shipping:
            lines.append(f"Shipping: {format_currency(breakdown.shipping)}")
        for charge in document.additional_charges:
            lines.append(f"{charge.label}: {format_currency(charge.amount)}")
        if breakdown.rounding_adjustment:
            lines.append(f"Rounding: {format_currency(breakdown.rounding_adjustment)}")
        lines.append(f"Grand Total: {format_currency(breakdown.grand_total)}")

        if document.outputs.show_amount_in_words:
            lines.append(f"Amount in words: {breakdown.amount_in_words}")

        return "\n".join(lines)
