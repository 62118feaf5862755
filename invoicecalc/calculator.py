"""Document calculation engine.

This module turns a Document into a Breakdown: per-line subtotals,
discounts and taxes, document-level aggregates, rounding, and the
grand total in words. Calculations are pure; the input document is
never modified.
"""

import logging
from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal

from .models import Breakdown, Document, LineBreakdown, LineItem
from .words import amount_in_words

logger = logging.getLogger(__name__)

HUNDRED = Decimal('100')
WHOLE_UNIT = Decimal('1')

_ROUNDING_MODES = {
    'nearest': ROUND_HALF_UP,
    'up': ROUND_CEILING,
    'down': ROUND_FLOOR,
}


def apply_rounding(amount: Decimal, policy: str) -> Decimal:
    """Round an amount to a whole currency unit.

    Args:
        amount: The amount to round.
        policy: One of "nearest" (ties away from zero), "up", "down", "none".

    Returns:
        The rounded amount, or the amount unchanged for "none".

    Raises:
        ValueError: If the policy is unknown.
    """
    if policy == 'none':
        return amount
    try:
        mode = _ROUNDING_MODES[policy]
    except KeyError:
        raise ValueError(f"Unknown rounding policy: {policy}")
    if not amount.is_finite():
        return amount
    return amount.quantize(WHOLE_UNIT, rounding=mode)


class DocumentCalculator:
    """Computes the financial breakdown of billing documents.

    The calculator holds no state between calls; one instance may be
    shared freely.
    """

    def calculate(self, document: Document) -> Breakdown:
        """Compute the full breakdown of a document.

        Args:
            document: The document to compute.

        Returns:
            A newly built Breakdown.
        """
        lines = [self._calculate_line(item) for item in document.line_items]

        subtotal = sum((line.subtotal for line in lines), Decimal('0'))
        total_discount = sum((line.discount_amount for line in lines), Decimal('0'))

        tax_breakdown: dict[str, Decimal] = {}
        for line in lines:
            for name, amount in line.tax_amounts.items():
                tax_breakdown[name] = tax_breakdown.get(name, Decimal('0')) + amount
        total_tax = sum(tax_breakdown.values(), Decimal('0'))

        additional_charges_total = sum(
            (charge.amount for charge in document.additional_charges),
            Decimal('0')
        )

        subtotal_before_rounding = (
            subtotal - total_discount + total_tax
            + document.shipping + additional_charges_total
        )

        if document.rounding == 'none':
            grand_total = subtotal_before_rounding
            rounding_adjustment = Decimal('0')
        else:
            grand_total = apply_rounding(subtotal_before_rounding, document.rounding)
            rounding_adjustment = grand_total - subtotal_before_rounding

        logger.debug(
            "Calculated %s %s: %d line(s), grand total %s",
            document.document_type, document.doc_no, len(lines), grand_total
        )

        return Breakdown(
            line_items=lines,
            subtotal=subtotal,
            total_discount=total_discount,
            tax_breakdown=tax_breakdown,
            total_tax=total_tax,
            shipping=document.shipping,
            additional_charges_total=additional_charges_total,
            subtotal_before_rounding=subtotal_before_rounding,
            rounding_adjustment=rounding_adjustment,
            grand_total=grand_total,
            amount_in_words=self._words(grand_total),
        )

    def verify(self, breakdown: Breakdown) -> bool:
        """Check the internal consistency of a breakdown.

        Returns:
            True if the line figures, aggregates and rounding agree.
        """
        lines_total = sum((line.total for line in breakdown.line_items), Decimal('0'))
        lines_tax = sum((line.tax_amount for line in breakdown.line_items), Decimal('0'))
        return (
            lines_total == breakdown.subtotal - breakdown.total_discount + breakdown.total_tax
            and lines_tax == breakdown.total_tax
            and breakdown.grand_total - breakdown.subtotal_before_rounding
            == breakdown.rounding_adjustment
        )

    @staticmethod
    def _calculate_line(item: LineItem) -> LineBreakdown:
        subtotal = item.quantity * item.unit_price

        discount_amount = Decimal('0')
        if item.discount is not None:
            if item.discount.type == 'percent':
                discount_amount = subtotal * item.discount.value / HUNDRED
            else:
                discount_amount = item.discount.value

        # Not clamped: a discount above the subtotal gives a negative base.
        taxable_base = subtotal - discount_amount

        tax_amounts: dict[str, Decimal] = {}
        tax_amount = Decimal('0')
        for component in item.tax:
            amount = taxable_base * component.rate / HUNDRED
            tax_amounts[component.name] = tax_amounts.get(component.name, Decimal('0')) + amount
            tax_amount += amount

        return LineBreakdown(
            line_item=item,
            subtotal=subtotal,
            discount_amount=discount_amount,
            tax_amount=tax_amount,
            total=taxable_base + tax_amount,
            tax_amounts=tax_amounts,
        )

    @staticmethod
    def _words(grand_total: Decimal) -> str:
        if not grand_total.is_finite():
            return ''
        return amount_in_words(grand_total)


def compute(document: Document) -> Breakdown:
    """Compute the breakdown of a document with a default calculator."""
    return DocumentCalculator().calculate(document)
