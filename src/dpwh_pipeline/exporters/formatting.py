"""
exporters/formatting.py — Number rendering for report cells.

Three column classes:
  large numbers  budgets/costs/savings totals → "4,500,000"  (null → "0")
  money          per-record averages/medians  → "12,345.68" (null → "0.00")
  ratios         delays, percentages, indices → "1234.57"   (null → "0.00")

All rounding is half away from zero; negative zero renders unsigned.
Count, rank and year columns are left as integers.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

import polars as pl

from dpwh_shared.constants import LARGE_NUMBER_COLUMNS, MONEY_COLUMNS, RATIO_COLUMNS
from dpwh_shared.parsing import round_half_up


def _finite(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def format_large_number(value: Any) -> str:
    """Round to an integer and group thousands: 4500000.4 → "4,500,000"."""
    number = _finite(value)
    if number is None:
        return "0"
    rounded = round_half_up(number)
    if rounded == 0:
        rounded = Decimal(0)
    return f"{rounded:,.0f}"


def format_number(value: Any, *, grouping: bool = False) -> str:
    """Render with exactly two decimals, optionally grouping thousands."""
    number = _finite(value)
    if number is None:
        return "0.00"
    rounded = round_half_up(number, 2)
    if rounded == 0:
        return "0.00"
    return f"{rounded:,.2f}" if grouping else f"{rounded:.2f}"


def _format_column(values: Iterable[Any], column: str) -> list[str]:
    if column in LARGE_NUMBER_COLUMNS:
        return [format_large_number(v) for v in values]
    if column in MONEY_COLUMNS:
        return [format_number(v, grouping=True) for v in values]
    return [format_number(v) for v in values]


def format_report(df: pl.DataFrame) -> pl.DataFrame:
    """
    Replace numeric report columns with their rendered strings.

    Columns outside the three formatting classes pass through unchanged.
    """
    formatted = LARGE_NUMBER_COLUMNS | MONEY_COLUMNS | RATIO_COLUMNS
    return df.with_columns(
        [
            pl.Series(name, _format_column(df[name].to_list(), name), dtype=pl.String)
            for name in df.columns
            if name in formatted
        ]
    )
