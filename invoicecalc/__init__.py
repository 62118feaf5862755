"""Billing document calculator: totals, taxes, rounding and amount in words."""

from .calculator import DocumentCalculator, compute
from .extractor import DocumentExtractor
from .words import amount_in_words

__all__ = ['DocumentCalculator', 'DocumentExtractor', 'amount_in_words', 'compute']
