"""
reports/contractors.py — Report 2: top contractor performance ranking.

Contractors with fewer than `min_projects` records are dropped. For the
rest:
  TotalCost         sum of contract costs
  NumProjects       record count
  AvgDelay          mean completion delay over records that have one, else 0
  TotalSavings      sum of cost savings
  ReliabilityIndex  max(0, 1 − AvgDelay/90) × (TotalSavings / TotalCost) × 100,
                    clamped to [0, 100]; 0 when TotalCost is not positive
  RiskFlag          "High Risk" below 50, otherwise "Low Risk"

Sorted by TotalCost descending (Contractor ascending on ties), truncated to
`top_n`, and ranked from 1.
"""

from __future__ import annotations

from collections.abc import Sequence

import polars as pl
import structlog

from dpwh_shared.constants import (
    HIGH_RISK,
    LOW_RISK,
    MIN_CONTRACTOR_PROJECTS,
    RELIABILITY_DELAY_HORIZON_DAYS,
    REPORT2_COLUMNS,
    RISK_THRESHOLD,
    TOP_CONTRACTORS,
)
from dpwh_shared.models.projects import DerivedRecord
from dpwh_pipeline.reports.base import records_to_frame

log = structlog.get_logger(__name__)


def contractor_ranking(
    records: Sequence[DerivedRecord] | pl.DataFrame,
    *,
    min_projects: int = MIN_CONTRACTOR_PROJECTS,
    top_n: int = TOP_CONTRACTORS,
) -> pl.DataFrame:
    """Build Report 2 as a numeric DataFrame in REPORT2_COLUMNS order."""
    df = records_to_frame(records)

    grouped = df.group_by("contractor", maintain_order=True).agg(
        pl.col("contract_cost").sum().alias("TotalCost"),
        pl.len().alias("NumProjects"),
        pl.col("completion_delay_days").mean().alias("AvgDelay"),
        pl.col("cost_savings").fill_null(0.0).sum().alias("TotalSavings"),
    )
    eligible = grouped.filter(pl.col("NumProjects") >= min_projects)

    delay_factor = (1.0 - pl.col("AvgDelay") / RELIABILITY_DELAY_HORIZON_DAYS).clip(
        lower_bound=0.0
    )
    report = (
        eligible.with_columns(pl.col("AvgDelay").fill_null(0.0))
        .with_columns(
            pl.when(pl.col("TotalCost") > 0)
            .then(
                (delay_factor * (pl.col("TotalSavings") / pl.col("TotalCost")) * 100.0)
                .clip(0.0, 100.0)
            )
            .otherwise(0.0)
            .alias("ReliabilityIndex"),
        )
        .with_columns(
            pl.when(pl.col("ReliabilityIndex") < RISK_THRESHOLD)
            .then(pl.lit(HIGH_RISK))
            .otherwise(pl.lit(LOW_RISK))
            .alias("RiskFlag"),
        )
        .rename({"contractor": "Contractor"})
        .sort(["TotalCost", "Contractor"], descending=[True, False])
        .head(top_n)
        .with_row_index("Rank", offset=1)
        .with_columns(
            pl.col("Rank").cast(pl.Int64),
            pl.col("NumProjects").cast(pl.Int64),
        )
        .select(REPORT2_COLUMNS)
    )

    log.info(
        "report_built",
        report="contractor_ranking",
        contractors=len(grouped),
        eligible=len(eligible),
        rows=len(report),
    )
    return report
