"""
tests/conftest.py — Shared pytest fixtures for the pipeline test suite.

Provides:
  fixture_path()   — resolves paths to tests/fixtures/
  sample_csv       — path to the small projects CSV fixture
  make_row()       — factory for raw CSV rows (dict of str)
  make_record()    — factory for DerivedRecord instances
  write_csv()      — writes raw rows to a CSV under tmp_path
  _reset_logging   — (autouse) resets structlog and root-logger handlers after each test
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import pytest
import structlog

from dpwh_shared.constants import REQUIRED_COLUMNS
from dpwh_shared.models.projects import DerivedRecord

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def fixture_path() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_csv() -> Path:
    return FIXTURES_DIR / "projects_sample.csv"


# ---------------------------------------------------------------------------
# Row / record factories
# ---------------------------------------------------------------------------

_BASE_ROW: dict[str, str] = {
    "Region": "NCR",
    "MainIsland": "Luzon",
    "FundingYear": "2021",
    "ApprovedBudgetForContract": "1,000,000",
    "ContractCost": "900000",
    "StartDate": "2021-01-01",
    "ActualCompletionDate": "2021-02-15",
    "ProjectLatitude": "14.6",
    "ProjectLongitude": "121.0",
    "Province": "Metro Manila",
    "Contractor": "A",
    "TypeOfWork": "Flood Control",
}


@pytest.fixture
def make_row() -> Callable[..., dict[str, Any]]:
    """Return a factory: make_row(Region="", FundingYear="2019") → raw row."""

    def _make(**overrides: Any) -> dict[str, Any]:
        row: dict[str, Any] = dict(_BASE_ROW)
        row.update(overrides)
        return row

    return _make


_BASE_RECORD: dict[str, Any] = {
    "region": "NCR",
    "main_island": "Luzon",
    "funding_year": 2021,
    "approved_budget": 1_000_000.0,
    "contract_cost": 900_000.0,
    "start_date": date(2021, 1, 1),
    "actual_completion_date": date(2021, 2, 15),
    "latitude": 14.6,
    "longitude": 121.0,
    "province": "Metro Manila",
    "contractor": "A",
    "type_of_work": "Flood Control",
    "cost_savings": 100_000.0,
    "completion_delay_days": 45,
}


@pytest.fixture
def make_record() -> Callable[..., DerivedRecord]:
    """
    Return a factory for DerivedRecord.

    cost_savings is recomputed from budget and cost unless given.
    """

    def _make(**overrides: Any) -> DerivedRecord:
        data = dict(_BASE_RECORD)
        data.update(overrides)
        if "cost_savings" not in overrides:
            data["cost_savings"] = data["approved_budget"] - data["contract_cost"]
        return DerivedRecord(**data)

    return _make


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[list[dict[str, Any]]], Path]:
    """Return a writer: write_csv(rows) → path of a CSV with REQUIRED_COLUMNS."""

    def _write(rows: list[dict[str, Any]], name: str = "projects.csv") -> Path:
        path = tmp_path / name
        with path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(
                fh, fieldnames=list(REQUIRED_COLUMNS), lineterminator="\n"
            )
            writer.writeheader()
            for row in rows:
                writer.writerow({k: row.get(k, "") for k in REQUIRED_COLUMNS})
        return path

    return _write


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo configure_logging() so one test's level/stream never leaks into the next."""
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    for handler in [h for h in root.handlers if type(h) is logging.StreamHandler]:
        root.removeHandler(handler)
    root.setLevel(level)
