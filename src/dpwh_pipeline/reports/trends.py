"""
reports/trends.py — Report 3: annual cost-overrun trends by type of work.

One row per (FundingYear, TypeOfWork):
  TotalProjects  record count
  AvgSavings     mean cost savings
  OverrunRate    share of records with negative savings, in percent
  YoYChange      percent change of AvgSavings against the same type's
                 baseline-year AvgSavings, relative to |baseline|

YoYChange is 0 for baseline-year rows, for types with no baseline-year
group, and when the baseline is 0. Sorted by FundingYear ascending, then
AvgSavings descending, then TypeOfWork ascending.
"""

from __future__ import annotations

from collections.abc import Sequence

import polars as pl
import structlog

from dpwh_shared.constants import DEFAULT_BASELINE_YEAR, REPORT3_COLUMNS
from dpwh_shared.models.projects import DerivedRecord
from dpwh_pipeline.reports.base import records_to_frame

log = structlog.get_logger(__name__)


def annual_type_trends(
    records: Sequence[DerivedRecord] | pl.DataFrame,
    *,
    baseline_year: int = DEFAULT_BASELINE_YEAR,
) -> pl.DataFrame:
    """Build Report 3 as a numeric DataFrame in REPORT3_COLUMNS order."""
    df = records_to_frame(records)
    savings = pl.col("cost_savings")

    grouped = (
        df.group_by(["funding_year", "type_of_work"], maintain_order=True)
        .agg(
            pl.len().alias("TotalProjects"),
            savings.mean().alias("AvgSavings"),
            savings.count().alias("_savings_count"),
            (savings < 0).sum().alias("_overrun_count"),
        )
        .with_columns(
            pl.col("AvgSavings").fill_null(0.0),
            pl.when(pl.col("_savings_count") > 0)
            .then(pl.col("_overrun_count") * 100.0 / pl.col("_savings_count"))
            .otherwise(0.0)
            .alias("OverrunRate"),
        )
    )

    baseline = grouped.filter(pl.col("funding_year") == baseline_year).select(
        "type_of_work",
        pl.col("AvgSavings").alias("_baseline"),
    )

    no_change = (
        (pl.col("funding_year") == baseline_year)
        | pl.col("_baseline").is_null()
        | (pl.col("_baseline") == 0)
    )
    report = (
        grouped.join(baseline, on="type_of_work", how="left")
        .with_columns(
            pl.when(no_change)
            .then(0.0)
            .otherwise(
                (pl.col("AvgSavings") - pl.col("_baseline"))
                * 100.0
                / pl.col("_baseline").abs()
            )
            .alias("YoYChange"),
            pl.col("TotalProjects").cast(pl.Int64),
        )
        .rename({"funding_year": "FundingYear", "type_of_work": "TypeOfWork"})
        .sort(
            ["FundingYear", "AvgSavings", "TypeOfWork"],
            descending=[False, True, False],
        )
        .select(REPORT3_COLUMNS)
    )

    log.info("report_built", report="annual_type_trends", rows=len(report))
    return report
