"""
Lenient parsers for raw host values.

Host rows carry numbers as free-form strings ("3", "2,5", "120 мин", "").
These helpers read the leading number the way a spreadsheet user would expect
and return a fallback instead of raising, so callers can fall through their
priority chains.
"""

import math
import re
from datetime import date, datetime
from typing import Any

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:[.,]\d*)?|[.,]\d+))")


def is_blank(value: Any) -> bool:
    """True for None and for strings that hold only whitespace."""
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_number(value: Any) -> float | None:
    """
    Parse the leading number of a raw value.

    Accepts ints/floats as-is and strings with a leading decimal number using
    either '.' or ',' as the separator. Returns None when nothing numeric leads
    the value or the result is not finite.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return None
        number = float(match.group(1).replace(",", "."))
    if not math.isfinite(number):
        return None
    return number


def parse_positive_int(value: Any) -> int | None:
    """Parse a whole positive count, or None."""
    number = parse_number(value)
    if number is None or number < 1:
        return None
    return int(number)


def parse_host_date(value: Any) -> date | None:
    """Parse a host date in dd.mm.yyyy form (a trailing time part is ignored)."""
    if is_blank(value):
        return None
    head = str(value).strip().split(" ")[0]
    try:
        return datetime.strptime(head, "%d.%m.%Y").date()
    except ValueError:
        return None


def format_host_datetime(value: datetime) -> str:
    """Format an instant the way the host stores start times."""
    return value.strftime("%d.%m.%Y %H:%M:%S")
