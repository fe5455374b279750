from decimal import Decimal

import pytest

from netdesk.app.finance.money import InvalidAmount, parse_amount, to_amount


def test_floats_convert_through_their_repr():
    assert to_amount(0.1) == Decimal("0.1")
    assert to_amount(1999.99) == Decimal("1999.99")


def test_ints_and_decimals_pass_through():
    assert to_amount(1500) == Decimal(1500)
    assert to_amount(Decimal("12.50")) == Decimal("12.50")


def test_negative_allowed_only_when_requested():
    assert to_amount(-250, allow_negative=True) == Decimal(-250)
    with pytest.raises(InvalidAmount, match="must not be negative"):
        to_amount(-250)


def test_invalid_amount_carries_field_and_reason():
    with pytest.raises(InvalidAmount) as excinfo:
        to_amount(float("inf"), field="payment.amount")

    assert excinfo.value.field == "payment.amount"
    assert excinfo.value.reason == "not finite"
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("value", ["12", None, True, [1], object()])
def test_non_numeric_values_are_rejected(value):
    with pytest.raises(InvalidAmount, match="not a number"):
        to_amount(value)


def test_parse_amount_accepts_padded_decimal_text():
    assert parse_amount(" 12.5 ") == Decimal("12.5")
    assert parse_amount("-40", allow_negative=True) == Decimal(-40)


@pytest.mark.parametrize(
    "text,reason",
    [
        ("abc", "not a number"),
        ("", "not a number"),
        ("-1", "must not be negative"),
        ("Infinity", "not finite"),
        ("NaN", "not finite"),
    ],
)
def test_parse_amount_rejects_bad_text(text, reason):
    with pytest.raises(InvalidAmount) as excinfo:
        parse_amount(text)

    assert excinfo.value.reason == reason
    assert excinfo.value.field == "amount"
