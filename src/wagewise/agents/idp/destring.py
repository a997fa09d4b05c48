"""Destring helpers: coerce spreadsheet cell values into text, numbers and flags.

Sheets deliver numbers as floats, ints, or text such as ``"KES 45,000"``,
``"(1,200)"`` or ``"350-"``. ``to_decimal`` is strict and raises
:class:`DestringError`; ``parse_number`` is the lenient variant that maps
anything unparseable to zero.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from wagewise.core.exceptions import DestringError

_CURRENCY_RE = re.compile(r"kshs?\.?|kes", re.IGNORECASE)
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_TRUE_VALUES = frozenset({"true", "yes", "1", "y"})


def is_blank(value: Any) -> bool:
    """``None``, empty or whitespace-only text."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def clean_text(value: Any) -> str:
    """Render a cell as trimmed text. Integral floats lose their ``.0``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return str(value.quantize(Decimal("1")))
    return str(value).strip()


def to_decimal(value: Any) -> Decimal:
    """Strictly coerce a cell to Decimal.

    Blank cells become zero. Thousands separators, spaces and a KES/Ksh
    currency marker are ignored; ``(123)`` and trailing-minus ``123-`` are
    negative. Anything else raises :class:`DestringError`.
    """
    if is_blank(value):
        return Decimal("0")
    if isinstance(value, bool):
        raise DestringError(value, "boolean is not a number")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise DestringError(value, "not a finite number")
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise DestringError(value, "not a finite number")
        return Decimal(str(value))

    text = _CURRENCY_RE.sub("", str(value))
    text = text.replace(",", "").replace(" ", "").strip()

    negative = False
    if text.startswith("(") and text.endswith(")"):
        negative = True
        text = text[1:-1]
    elif text.endswith("-") and len(text) > 1:
        negative = True
        text = text[:-1]

    if not _NUMBER_RE.match(text):
        raise DestringError(value)
    try:
        number = Decimal(text)
    except InvalidOperation as exc:
        raise DestringError(value) from exc
    return -number if negative else number


def parse_number(value: Any) -> Decimal:
    """Lenient numeric coercion; unparseable input yields zero."""
    try:
        return to_decimal(value)
    except DestringError:
        return Decimal("0")


def is_numeric(value: Any) -> bool:
    """True when the cell holds a number or text that parses as one (blanks excluded)."""
    if is_blank(value) or isinstance(value, bool):
        return False
    try:
        to_decimal(value)
    except DestringError:
        return False
    return True


def parse_boolean(value: Any) -> bool:
    """``true``/``yes``/``y``/``1`` (any case) are true; everything else is false."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    return clean_text(value).lower() in _TRUE_VALUES


def split_full_name(value: Any) -> tuple[str, str]:
    """Split a full name into ``(surname, other_names)``.

    The last whitespace-separated token is the surname; a single token is
    treated as other names with an empty surname.
    """
    tokens = clean_text(value).split()
    if not tokens:
        return "", ""
    if len(tokens) == 1:
        return "", tokens[0]
    return tokens[-1], " ".join(tokens[:-1])
