"""
constants.py — shared constants used across the pipeline.

Source column names, sentinel values, default year window, and the output
file layout are defined here so the parsers, aggregators, and exporters
stay in sync.
"""

from __future__ import annotations

from typing import Final, Literal

# ---------------------------------------------------------------------------
# Source columns (case-sensitive, exact)
# ---------------------------------------------------------------------------
REQUIRED_COLUMNS: Final[tuple[str, ...]] = (
    "Region",
    "MainIsland",
    "FundingYear",
    "ApprovedBudgetForContract",
    "ContractCost",
    "StartDate",
    "ActualCompletionDate",
    "ProjectLatitude",
    "ProjectLongitude",
    "Province",
    "Contractor",
    "TypeOfWork",
)

# ---------------------------------------------------------------------------
# Sentinels and defaults
# ---------------------------------------------------------------------------
NA_SENTINEL: Final[str] = "n/a"
UNKNOWN: Final[str] = "Unknown"
CURRENCY_MARKERS: Final[tuple[str, ...]] = ("php", "₱")

DEFAULT_START_YEAR: Final[int] = 2021
DEFAULT_END_YEAR: Final[int] = 2023
DEFAULT_BASELINE_YEAR: Final[int] = 2021

# ---------------------------------------------------------------------------
# Report parameters
# ---------------------------------------------------------------------------
HIGH_DELAY_DAYS: Final[int] = 30
MIN_CONTRACTOR_PROJECTS: Final[int] = 5
TOP_CONTRACTORS: Final[int] = 15
RELIABILITY_DELAY_HORIZON_DAYS: Final[float] = 90.0
RISK_THRESHOLD: Final[float] = 50.0

RiskFlag = Literal["High Risk", "Low Risk"]
HIGH_RISK: Final[RiskFlag] = "High Risk"
LOW_RISK: Final[RiskFlag] = "Low Risk"

# ---------------------------------------------------------------------------
# Output files and column orders
# ---------------------------------------------------------------------------
REPORT1_FILENAME: Final[str] = "report1_regional_efficiency.csv"
REPORT2_FILENAME: Final[str] = "report2_contractor_ranking.csv"
REPORT3_FILENAME: Final[str] = "report3_cost_overrun_trends.csv"
SUMMARY_FILENAME: Final[str] = "summary.json"

REPORT1_COLUMNS: Final[tuple[str, ...]] = (
    "Region",
    "MainIsland",
    "TotalBudget",
    "MedianSavings",
    "AvgDelay",
    "HighDelayPct",
    "EfficiencyScore",
)
REPORT2_COLUMNS: Final[tuple[str, ...]] = (
    "Rank",
    "Contractor",
    "TotalCost",
    "NumProjects",
    "AvgDelay",
    "TotalSavings",
    "ReliabilityIndex",
    "RiskFlag",
)
REPORT3_COLUMNS: Final[tuple[str, ...]] = (
    "FundingYear",
    "TypeOfWork",
    "TotalProjects",
    "AvgSavings",
    "OverrunRate",
    "YoYChange",
)

# Formatting classes per output column (see exporters.formatting)
LARGE_NUMBER_COLUMNS: Final[frozenset[str]] = frozenset(
    {"TotalBudget", "TotalCost", "TotalSavings"}
)
MONEY_COLUMNS: Final[frozenset[str]] = frozenset({"MedianSavings", "AvgSavings"})
RATIO_COLUMNS: Final[frozenset[str]] = frozenset(
    {
        "AvgDelay",
        "HighDelayPct",
        "EfficiencyScore",
        "ReliabilityIndex",
        "OverrunRate",
        "YoYChange",
    }
)
