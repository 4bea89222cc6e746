# auction_board/utils/currency.py
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

CURRENCY_SYMBOL = "₹"
PLACEHOLDER = "-"

CRORE = 10_000_000
LAKH = 100_000

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def normalize_amount(raw: Any) -> float:
    """Converts a raw amount field ('₹1,000', '12.5L', '') into a non-negative float.

    Everything except ASCII digits and '.' is stripped before parsing, so the
    result can never be negative. Unparseable input yields 0.
    """
    text = "" if raw is None else str(raw)
    cleaned = _NON_NUMERIC.sub("", text)
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return 0.0
    value = float(match.group(0))
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def _coerce_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def group_indian(digits: str) -> str:
    """Groups an integer digit string the Indian way: 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(value: Any) -> str:
    """Formats an amount for display using lakh/crore units.

    >>> format_currency(10000000)
    '₹1.00 Cr'
    >>> format_currency(150000)
    '₹1.50 L'
    >>> format_currency(5000)
    '₹5,000'
    """
    number = _coerce_number(value)
    if number is None:
        return PLACEHOLDER

    if number >= CRORE:
        return f"{CURRENCY_SYMBOL}{number / CRORE:.2f} Cr"
    if number >= LAKH:
        return f"{CURRENCY_SYMBOL}{number / LAKH:.2f} L"

    sign = "-" if number < 0 else ""
    rounded = Decimal(repr(abs(number))).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    integer_part, _, fraction_part = f"{rounded:f}".partition(".")
    fraction_part = fraction_part.rstrip("0")
    if rounded == 0:
        sign = ""

    formatted = group_indian(integer_part)
    if fraction_part:
        formatted = f"{formatted}.{fraction_part}"
    return f"{CURRENCY_SYMBOL}{sign}{formatted}"
