"""Amount-in-words conversion using the Indian numbering system.

Amounts are grouped as crore (10,000,000), lakh (100,000), thousand and
hundred, e.g. 1234567 -> "Twelve Lakh Thirty Four Thousand Five Hundred
Sixty Seven Rupees Only".
"""

from decimal import Decimal, InvalidOperation

CURRENCY_SUFFIX = 'Rupees Only'

_ONES = ['', 'One', 'Two', 'Three', 'Four', 'Five', 'Six', 'Seven', 'Eight', 'Nine']
_TEENS = [
    'Ten', 'Eleven', 'Twelve', 'Thirteen', 'Fourteen',
    'Fifteen', 'Sixteen', 'Seventeen', 'Eighteen', 'Nineteen',
]
_TENS = ['', '', 'Twenty', 'Thirty', 'Forty', 'Fifty', 'Sixty', 'Seventy', 'Eighty', 'Ninety']

_CRORE = 10_000_000
_LAKH = 100_000
_THOUSAND = 1_000
_HUNDRED = 100


def _two_digit_words(n: int) -> str:
    if n < 10:
        return _ONES[n]
    if n < 20:
        return _TEENS[n - 10]
    tens, ones = divmod(n, 10)
    if ones:
        return f"{_TENS[tens]} {_ONES[ones]}"
    return _TENS[tens]


def number_to_words(n: int) -> str:
    """Convert a non-negative integer to words in Indian grouping.

    Args:
        n: Whole number to convert.

    Returns:
        The words without currency suffix ("" for 0).
    """
    if n < 0:
        raise ValueError(f"Expected a non-negative number, got {n}")

    crore, n = divmod(n, _CRORE)
    lakh, n = divmod(n, _LAKH)
    thousand, n = divmod(n, _THOUSAND)
    hundred, n = divmod(n, _HUNDRED)

    parts = []
    if crore:
        # More than 99 crore: the count itself is spelled out in full.
        parts.append(f"{number_to_words(crore)} Crore")
    if lakh:
        parts.append(f"{_two_digit_words(lakh)} Lakh")
    if thousand:
        parts.append(f"{_two_digit_words(thousand)} Thousand")
    if hundred:
        parts.append(f"{_ONES[hundred]} Hundred")
    if n:
        parts.append(_two_digit_words(n))

    return ' '.join(parts).strip()


def amount_in_words(amount) -> str:
    """Render a currency amount in words.

    The fractional part is truncated before conversion. Negative amounts
    are prefixed with "Minus".

    Args:
        amount: int, float, str or Decimal amount.

    Returns:
        Text such as "One Hundred Rupees Only".

    Raises:
        ValueError: If the amount is not a finite number.
    """
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Cannot convert amount to words: {amount!r}")
    if not value.is_finite():
        raise ValueError(f"Cannot convert non-finite amount to words: {amount!r}")

    whole = int(value)
    if whole == 0:
        return f"Zero {CURRENCY_SUFFIX}"

    words = number_to_words(abs(whole))
    if whole < 0:
        words = f"Minus {words}"
    return f"{words} {CURRENCY_SUFFIX}"
