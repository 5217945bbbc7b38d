"""Typed value comparison.

Two values are compared as numbers when both parse as numbers, else as
timestamps when both parse as dates, else as strings by code point.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
import math
import warnings

import pandas as pd

from ..transformations.base import parse_json_array, value_to_text

_TRUE_TEXT = "true"
_FALSE_TEXT = "false"


def parse_number(value: object) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, Decimal)):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value)) if math.isfinite(value) else None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def parse_datetime(value: object) -> pd.Timestamp | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (pd.Timestamp, date)):
        parsed = pd.Timestamp(value)
    else:
        text = str(value).strip()
        if not text or parse_number(text) is not None:
            return None
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert(None)
    return parsed


def _sign(difference: bool, greater: bool) -> int:
    if not difference:
        return 0
    return 1 if greater else -1


def compare_values(left: object, right: object) -> int:
    """Three-way comparison of two non-null values."""
    left_number, right_number = parse_number(left), parse_number(right)
    if left_number is not None and right_number is not None:
        return _sign(left_number != right_number, left_number > right_number)
    left_date, right_date = parse_datetime(left), parse_datetime(right)
    if left_date is not None and right_date is not None:
        return _sign(left_date != right_date, left_date > right_date)
    left_text, right_text = value_to_text(left), value_to_text(right)
    return _sign(left_text != right_text, left_text > right_text)


def values_equal(left: object, right: object) -> bool:
    if left is None and right is None:
        return True
    if left is None or right is None:
        return False
    return compare_values(left, right) == 0


def is_between(value: object, low: object, high: object) -> bool:
    """Inclusive range check; all three values share one comparison kind."""
    if value is None:
        return False
    numbers = [parse_number(v) for v in (value, low, high)]
    if all(n is not None for n in numbers):
        number, low_number, high_number = numbers
        return low_number <= number <= high_number  # type: ignore[operator]
    dates = [parse_datetime(v) for v in (value, low, high)]
    if all(d is not None for d in dates):
        moment, low_date, high_date = dates
        return low_date <= moment <= high_date  # type: ignore[operator]
    text = value_to_text(value)
    return value_to_text(low) <= text <= value_to_text(high)


def is_truthy(value: object) -> bool:
    """A value is true if it is boolean true or a non-zero number."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip()
    if text.lower() == _TRUE_TEXT:
        return True
    if not text or text.lower() == _FALSE_TEXT:
        return False
    number = parse_number(value)
    return number is not None and number != 0


def as_items(value: object) -> list[object] | None:
    """Return the elements of a list or JSON array value, else ``None``."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return parse_json_array(value)
