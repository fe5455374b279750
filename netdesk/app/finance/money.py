"""
Finance - amount coercion.

Every amount entering the finance core passes through `to_amount`, so the
ledger fold and the words renderer only ever see finite `Decimal` values.
Floats are converted through their shortest repr (1999.99 -> Decimal("1999.99")),
never through their binary expansion.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Union

Amount = Union[int, float, Decimal]

ZERO = Decimal("0")


class InvalidAmount(ValueError):
    """Negative, non-finite or non-numeric amount handed to the finance core."""

    def __init__(self, value: Any, reason: str, *, field: str = "amount"):
        self.value = value
        self.reason = reason
        self.field = field
        super().__init__(f"Invalid {field} {value!r}: {reason}")


def to_amount(value: Any, *, field: str = "amount", allow_negative: bool = False) -> Decimal:
    # bool is an int subclass; True is not a currency amount.
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidAmount(value, "not a number", field=field)

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        try:
            amount = Decimal(repr(value))
        except InvalidOperation as exc:
            raise InvalidAmount(value, "not a number", field=field) from exc
    else:
        amount = Decimal(value)

    if not amount.is_finite():
        raise InvalidAmount(value, "not finite", field=field)
    if amount < 0 and not allow_negative:
        raise InvalidAmount(value, "must not be negative", field=field)
    return amount


def parse_amount(text: str, *, field: str = "amount", allow_negative: bool = False) -> Decimal:
    """Parse a user-supplied amount string ("1999.99"); same rules as `to_amount`."""
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, AttributeError) as exc:
        raise InvalidAmount(text, "not a number", field=field) from exc
    return to_amount(value, field=field, allow_negative=allow_negative)
