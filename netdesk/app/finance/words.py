"""
Finance - amount in words for printed receipts.

Uses the South Asian grouping: the last three digits are the hundreds group,
every group above that is two digits wide (Thousand, Lakh, Crore).

    12,34,56,789 -> Twelve Crore Thirty Four Lakh Fifty Six Thousand Seven Hundred Eighty Nine
"""

from __future__ import annotations

from decimal import ROUND_FLOOR

from .money import Amount, InvalidAmount, to_amount

CURRENCY_PHRASE = "Rupees Only"
ZERO_PHRASE = "ZERO RUPEES ONLY"

# 99,99,999 crore is the largest amount with a single "Crore" label.
MAX_AMOUNT = 10 ** 14 - 1

ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]

TENS = [
    "", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety",
]


def _two_digits(num: int) -> str:
    if num >= 20:
        words = TENS[num // 10]
        if num % 10:
            words += " " + ONES[num % 10]
        return words
    return ONES[num]


def _three_digits(num: int) -> str:
    parts = []
    if num >= 100:
        parts.append(ONES[num // 100] + " Hundred")
        num %= 100
    if num:
        parts.append(_two_digits(num))
    return " ".join(parts)


def _group_words(num: int) -> str:
    hundreds = num % 1000
    num //= 1000
    thousand = num % 100
    num //= 100
    lakh = num % 100
    crore = num // 100

    parts = []
    if crore:
        # 100 crore and up: the crore count (below one crore) reuses the same grouping.
        words = _two_digits(crore) if crore < 100 else _group_words(crore)
        parts.append(words + " Crore")
    if lakh:
        parts.append(_two_digits(lakh) + " Lakh")
    if thousand:
        parts.append(_two_digits(thousand) + " Thousand")
    if hundreds:
        parts.append(_three_digits(hundreds))
    return " ".join(parts)


def amount_to_words(amount: Amount) -> str:
    """
    Receipt transcription of `amount`, e.g. 45000 -> "FORTY FIVE THOUSAND RUPEES ONLY".

    Fractional units are dropped (1999.99 renders as 1999); round first if
    that matters.

    Raises:
        InvalidAmount: negative, non-finite or non-numeric amount,
            or one above MAX_AMOUNT.
    """
    value = to_amount(amount)
    if value >= MAX_AMOUNT + 1:
        raise InvalidAmount(amount, f"above {MAX_AMOUNT}")
    num = int(value.to_integral_value(rounding=ROUND_FLOOR))
    if num == 0:
        return ZERO_PHRASE
    return f"{_group_words(num)} {CURRENCY_PHRASE}".upper()
