"""
reports/summary.py — Whole-dataset summary statistics.
"""

from __future__ import annotations

from collections.abc import Sequence

import polars as pl

from dpwh_shared.constants import UNKNOWN
from dpwh_shared.models.projects import DerivedRecord, SummaryStats
from dpwh_shared.parsing import round_half_up
from dpwh_pipeline.reports.base import records_to_frame


def summarize(records: Sequence[DerivedRecord] | pl.DataFrame) -> SummaryStats:
    """
    Compute the summary.json figures.

    Contractors exclude the "Unknown" default; provinces exclude blanks.
    The average delay covers records with a delay and rounds to one
    decimal; total savings rounds to an integer.
    """
    df = records_to_frame(records)

    contractors = df.filter(
        pl.col("contractor").is_not_null()
        & (pl.col("contractor") != "")
        & (pl.col("contractor") != UNKNOWN)
    )["contractor"]
    provinces = df.filter(
        pl.col("province").is_not_null() & (pl.col("province") != "")
    )["province"]

    delays = df["completion_delay_days"].drop_nulls()
    avg_delay = delays.mean() if len(delays) else 0.0
    total_savings = df["cost_savings"].fill_null(0.0).sum()

    return SummaryStats(
        total_projects=len(df),
        total_contractors=contractors.n_unique(),
        total_provinces=provinces.n_unique(),
        global_avg_delay=float(round_half_up(float(avg_delay), 1)),
        total_savings=int(round_half_up(float(total_savings))),
    )
