import math

import pytest

from auction_board.utils.currency import format_currency, group_indian, normalize_amount


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("₹1,000", 1000),
        ("", 0),
        ("abc", 0),
        ("12.5L", 12.5),
        (None, 0),
        (2500, 2500),
        ("1.2.3", 1.2),
        (".5", 0.5),
        ("-500", 500),
        (float("nan"), 0),
        ("1,20,000", 120000),
    ],
)
def test_normalize_amount(raw, expected):
    assert normalize_amount(raw) == expected


def test_normalize_amount_never_negative():
    assert normalize_amount("-₹75,000") >= 0


@pytest.mark.parametrize(
    "value, expected",
    [
        (10000000, "₹1.00 Cr"),
        (150000, "₹1.50 L"),
        (5000, "₹5,000"),
        (float("nan"), "-"),
        (None, "-"),
        ("", "-"),
        ("not a number", "-"),
        (0, "₹0"),
        (99999.5, "₹99,999.5"),
        (12345.6789, "₹12,345.679"),
        (1234567, "₹12.35 L"),
        (25000000, "₹2.50 Cr"),
        ("150000", "₹1.50 L"),
        (-5000, "₹-5,000"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_currency_infinite_is_placeholder():
    assert format_currency(-math.inf) == "-"


@pytest.mark.parametrize(
    "digits, expected",
    [("5", "5"), ("999", "999"), ("1000", "1,000"), ("99999", "99,999"), ("1234567", "12,34,567")],
)
def test_group_indian(digits, expected):
    assert group_indian(digits) == expected
