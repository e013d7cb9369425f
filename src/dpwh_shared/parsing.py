"""
parsing.py — Field parsers for raw DPWH project CSV cells.

Raw cells arrive as text (or None when polars saw an empty field). Money
columns carry thousands separators and sometimes a "PHP" marker; dates are
mostly ISO but older exports use US-style slashes or month names.

Every parser here is total: unparseable input returns None, never raises.

Usage:
    from dpwh_shared.parsing import parse_number, parse_date, parse_year

    parse_number("PHP 1,234,567.50")   # 1234567.5
    parse_number("12abc")              # None
    parse_date("2021-03-15")           # date(2021, 3, 15)
    parse_date("03/15/2021")           # date(2021, 3, 15)
    parse_year("2021")                 # 2021
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from dateutil import parser as date_parser

from dpwh_shared.constants import CURRENCY_MARKERS, NA_SENTINEL

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_ISO_DATE_RE = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})")

# Tried in order after the ISO fast path; month-first wins on ambiguity.
_DATE_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y/%m/%d",
    "%m-%d-%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def is_missing(raw: Any) -> bool:
    """True for None, blank strings, and the "N/A" sentinel (any case)."""
    if raw is None:
        return True
    if isinstance(raw, float) and math.isnan(raw):
        return True
    if isinstance(raw, str):
        s = raw.strip()
        return s == "" or s.lower() == NA_SENTINEL
    return False


def _strip_currency(s: str) -> str:
    lowered = s.lower()
    for marker in CURRENCY_MARKERS:
        if lowered.startswith(marker):
            s = s[len(marker):].strip()
            lowered = s.lower()
        if lowered.endswith(marker):
            s = s[: -len(marker)].strip()
            lowered = s.lower()
    return s


def parse_number(raw: Any) -> float | None:
    """
    Parse a numeric cell into a float.

    Strips surrounding whitespace, thousands-separator commas, and a
    "PHP"/"₱" prefix or suffix. The remainder must be a complete decimal or
    exponential literal; partial matches such as "12abc" are rejected.

    Args:
        raw: Cell value (usually str; int/float pass through).

    Returns:
        float, or None when missing or not numeric.
    """
    if is_missing(raw) or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else None
    if not isinstance(raw, str):
        return None

    s = _strip_currency(raw.strip()).replace(",", "").replace(" ", "")
    if not _NUMBER_RE.fullmatch(s):
        return None
    value = float(s)
    return value if math.isfinite(value) else None


def parse_year(raw: Any) -> int | None:
    """
    Parse a funding-year cell into an int.

    Accepts integral numeric text only ("2021", "2021.0"); "2021.5" and
    non-numeric text return None.
    """
    value = parse_number(raw)
    if value is None or not value.is_integer():
        return None
    return int(value)


def parse_date(raw: Any) -> date | None:
    """
    Parse a date cell into a Python date.

    ISO "YYYY-MM-DD" (optionally followed by a time part) is tried first,
    then the explicit formats in _DATE_FORMATS, then dateutil for anything
    else that names a full day. Missing or unparseable input returns None.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if is_missing(raw) or not isinstance(raw, str):
        return None

    s = raw.strip()

    m = _ISO_DATE_RE.match(s)
    if m and (len(m.group(0)) == len(s) or s[len(m.group(0))] in "T "):
        try:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue

    # dateutil fills missing components from `default`; require a day, month
    # and year to be present by comparing against two different defaults.
    try:
        a = date_parser.parse(s, default=datetime(1900, 1, 1), ignoretz=True)
        b = date_parser.parse(s, default=datetime(1904, 2, 2), ignoretz=True)
    except (ValueError, OverflowError):
        return None
    if a != b:
        return None
    return a.date()


def round_half_up(value: float, digits: int = 0) -> Decimal:
    """
    Round half away from zero, returning a Decimal.

    Python's round() uses banker's rounding on the binary float, which
    would render 0.125 as "0.12"; report figures round 0.5 away from zero.
    """
    quantum = Decimal(1).scaleb(-digits)
    return Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
