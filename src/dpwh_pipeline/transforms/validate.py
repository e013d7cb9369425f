"""
transforms/validate.py — Row validation and cleaning.

validate_record() runs every check and reports all failures in check
order; clean_record() turns a valid raw row into a typed CleanedRecord,
defaulting optional fields once, here, so downstream stages never see
missing strings.

Usage:
    from dpwh_pipeline.transforms.validate import clean_record, clean_rows, validate_record

    result = validate_record(row)
    if not result.is_valid:
        print(result.errors)

    record = clean_record(row)            # CleanedRecord | None
    outcome = clean_rows(source.rows(df)) # records + per-row errors
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from dpwh_shared.constants import DEFAULT_END_YEAR, DEFAULT_START_YEAR, UNKNOWN
from dpwh_shared.models.projects import CleanedRecord, ValidationResult
from dpwh_shared.parsing import parse_date, parse_number, parse_year

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RowError:
    """Validation failure for one source row."""

    row_number: int
    reasons: tuple[str, ...]

    def __str__(self) -> str:
        return f"Row {self.row_number}: {', '.join(self.reasons)}"


@dataclass
class CleanOutcome:
    """Result of cleaning a batch of raw rows."""

    records: list[CleanedRecord] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)
    unparseable: int = 0
    rows_seen: int = 0


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_record(
    row: Mapping[str, Any],
    *,
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
) -> ValidationResult:
    """
    Check a raw row for the mandatory fields.

    Checks, all of which run:
      1. Region present and non-blank
      2. MainIsland present and non-blank
      3. FundingYear an integer within [start_year, end_year]
      4. ApprovedBudgetForContract present
      5. ContractCost present

    Presence is not parseability: "N/A" or "abc" passes checks 4 and 5 and
    is rejected later by clean_record().
    """
    errors: list[str] = []

    if _is_blank(row.get("Region")):
        errors.append("Missing Region")

    if _is_blank(row.get("MainIsland")):
        errors.append("Missing MainIsland")

    raw_year = row.get("FundingYear")
    year = parse_year(raw_year)
    if year is None or not start_year <= year <= end_year:
        shown = "<missing>" if _is_blank(raw_year) else str(raw_year).strip()
        errors.append(f"Invalid FundingYear: {shown}")

    if _is_blank(row.get("ApprovedBudgetForContract")):
        errors.append("Missing ApprovedBudgetForContract")

    if _is_blank(row.get("ContractCost")):
        errors.append("Missing ContractCost")

    return ValidationResult(is_valid=not errors, errors=tuple(errors))


def _parse_amount(raw: Any) -> float | None:
    value = parse_number(raw)
    if value is None or value < 0:
        return None
    return value


def clean_record(
    row: Mapping[str, Any],
    *,
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
) -> CleanedRecord | None:
    """
    Validate and type a raw row.

    Returns None when validation fails or when the budget or cost cannot be
    parsed as a non-negative number. Unparseable dates and coordinates
    become None on the record.
    """
    if not validate_record(row, start_year=start_year, end_year=end_year).is_valid:
        return None

    approved_budget = _parse_amount(row.get("ApprovedBudgetForContract"))
    contract_cost = _parse_amount(row.get("ContractCost"))
    if approved_budget is None or contract_cost is None:
        return None

    return CleanedRecord(
        region=_text(row.get("Region")),
        main_island=_text(row.get("MainIsland")),
        funding_year=parse_year(row.get("FundingYear")),
        approved_budget=approved_budget,
        contract_cost=contract_cost,
        start_date=parse_date(row.get("StartDate")),
        actual_completion_date=parse_date(row.get("ActualCompletionDate")),
        latitude=parse_number(row.get("ProjectLatitude")),
        longitude=parse_number(row.get("ProjectLongitude")),
        province=_text(row.get("Province")),
        contractor=_text(row.get("Contractor")) or UNKNOWN,
        type_of_work=_text(row.get("TypeOfWork")) or UNKNOWN,
    )


def clean_rows(
    rows: Iterable[tuple[int, Mapping[str, Any]]],
    *,
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
) -> CleanOutcome:
    """
    Clean a batch of (row_number, raw row) pairs.

    Invalid rows are excluded and recorded as RowError; rows that validate
    but carry an unparseable budget or cost are excluded and only counted.
    """
    outcome = CleanOutcome()
    for row_number, row in rows:
        outcome.rows_seen += 1
        validation = validate_record(row, start_year=start_year, end_year=end_year)
        if not validation.is_valid:
            outcome.errors.append(RowError(row_number, validation.errors))
            continue

        record = clean_record(row, start_year=start_year, end_year=end_year)
        if record is None:
            outcome.unparseable += 1
            continue
        outcome.records.append(record)

    log.debug(
        "rows_cleaned",
        seen=outcome.rows_seen,
        valid=len(outcome.records),
        invalid=len(outcome.errors),
        unparseable=outcome.unparseable,
    )
    return outcome
