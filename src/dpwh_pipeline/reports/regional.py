"""
reports/regional.py — Report 1: regional flood-mitigation efficiency.

One row per Region:
  TotalBudget      sum of approved budgets
  MedianSavings    median cost savings (even counts average the middle pair)
  AvgDelay         mean completion delay over records that have one, else 0
  HighDelayPct     share of delayed records above the high-delay threshold
  EfficiencyScore  (MedianSavings / AvgDelay) × 100 clamped to [0, 100];
                   0 when AvgDelay is not positive

MainIsland is taken from the first record of each region.
Rows are sorted by EfficiencyScore descending, then Region ascending.
"""

from __future__ import annotations

from collections.abc import Sequence

import polars as pl
import structlog

from dpwh_shared.constants import HIGH_DELAY_DAYS, REPORT1_COLUMNS
from dpwh_shared.models.projects import DerivedRecord
from dpwh_pipeline.reports.base import records_to_frame

log = structlog.get_logger(__name__)


def regional_efficiency(
    records: Sequence[DerivedRecord] | pl.DataFrame,
    *,
    high_delay_days: int = HIGH_DELAY_DAYS,
) -> pl.DataFrame:
    """Build Report 1 as a numeric DataFrame in REPORT1_COLUMNS order."""
    df = records_to_frame(records)
    delay = pl.col("completion_delay_days")

    report = (
        df.group_by("region", maintain_order=True)
        .agg(
            pl.col("main_island").first().alias("MainIsland"),
            pl.col("approved_budget").sum().alias("TotalBudget"),
            pl.col("cost_savings").median().alias("MedianSavings"),
            delay.mean().alias("AvgDelay"),
            delay.count().alias("_delay_count"),
            (delay > high_delay_days).sum().alias("_high_delay_count"),
        )
        .with_columns(
            pl.col("MedianSavings").fill_null(0.0),
            pl.col("AvgDelay").fill_null(0.0),
            pl.when(pl.col("_delay_count") > 0)
            .then(pl.col("_high_delay_count") * 100.0 / pl.col("_delay_count"))
            .otherwise(0.0)
            .alias("HighDelayPct"),
        )
        .with_columns(
            pl.when(pl.col("AvgDelay") > 0)
            .then((pl.col("MedianSavings") / pl.col("AvgDelay") * 100.0).clip(0.0, 100.0))
            .otherwise(0.0)
            .alias("EfficiencyScore"),
        )
        .rename({"region": "Region"})
        .sort(["EfficiencyScore", "Region"], descending=[True, False])
        .select(REPORT1_COLUMNS)
    )

    log.info("report_built", report="regional_efficiency", rows=len(report))
    return report
