"""
reports/base.py — Record → polars DataFrame conversion shared by the reports.
"""

from __future__ import annotations

from collections.abc import Sequence

import polars as pl

from dpwh_shared.models.projects import DerivedRecord

RECORD_SCHEMA: dict[str, pl.DataType] = {
    "region": pl.String(),
    "main_island": pl.String(),
    "funding_year": pl.Int64(),
    "approved_budget": pl.Float64(),
    "contract_cost": pl.Float64(),
    "start_date": pl.Date(),
    "actual_completion_date": pl.Date(),
    "latitude": pl.Float64(),
    "longitude": pl.Float64(),
    "province": pl.String(),
    "contractor": pl.String(),
    "type_of_work": pl.String(),
    "cost_savings": pl.Float64(),
    "completion_delay_days": pl.Int64(),
}


def records_to_frame(records: Sequence[DerivedRecord] | pl.DataFrame) -> pl.DataFrame:
    """
    Build a typed DataFrame from derived records, one row per record.

    A DataFrame is passed through unchanged so callers can convert once
    and share the frame between reports.
    """
    if isinstance(records, pl.DataFrame):
        return records
    rows = [r.to_row_dict() for r in records]
    return pl.DataFrame(
        {name: [row[name] for row in rows] for name in RECORD_SCHEMA},
        schema=RECORD_SCHEMA,
    )
