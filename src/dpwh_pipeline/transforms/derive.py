"""
transforms/derive.py — Derived fields, coordinate imputation, year filter.

Each function returns new records and leaves its input untouched.

Usage:
    from dpwh_pipeline.transforms.derive import (
        add_derived_fields,
        filter_by_year_range,
        impute_coordinates,
    )

    derived = [add_derived_fields(r) for r in cleaned]
    imputed = impute_coordinates(derived)
    filtered = filter_by_year_range(imputed, 2021, 2023)
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

import structlog

from dpwh_shared.models.projects import CleanedRecord, DerivedRecord

log = structlog.get_logger(__name__)


def completion_delay_days(start: date | None, completion: date | None) -> int | None:
    """Signed day count from start to completion; None if either is missing."""
    if start is None or completion is None:
        return None
    return (completion - start).days


def add_derived_fields(record: CleanedRecord) -> DerivedRecord:
    """Attach cost savings (budget − cost) and completion delay."""
    return DerivedRecord.from_cleaned(
        record,
        cost_savings=record.approved_budget - record.contract_cost,
        completion_delay_days=completion_delay_days(
            record.start_date, record.actual_completion_date
        ),
    )


def _mean(values: list[float]) -> float | None:
    return sum(values) / len(values) if values else None


def impute_coordinates(records: Sequence[DerivedRecord]) -> list[DerivedRecord]:
    """
    Fill missing latitude/longitude with the mean of the record's province.

    Records without a province, and provinces with no known value for a
    coordinate, keep their nulls. A present coordinate is never replaced.
    Output order matches input order.
    """
    latitudes: dict[str, list[float]] = {}
    longitudes: dict[str, list[float]] = {}
    for record in records:
        if not record.province:
            continue
        lats = latitudes.setdefault(record.province, [])
        lngs = longitudes.setdefault(record.province, [])
        if record.latitude is not None:
            lats.append(record.latitude)
        if record.longitude is not None:
            lngs.append(record.longitude)

    means = {
        province: (_mean(latitudes[province]), _mean(longitudes[province]))
        for province in latitudes
    }

    imputed: list[DerivedRecord] = []
    filled = 0
    for record in records:
        if record.province and (record.latitude is None or record.longitude is None):
            mean_lat, mean_lng = means[record.province]
            update: dict[str, float] = {}
            if record.latitude is None and mean_lat is not None:
                update["latitude"] = mean_lat
            if record.longitude is None and mean_lng is not None:
                update["longitude"] = mean_lng
            if update:
                record = record.model_copy(update=update)
                filled += 1
        imputed.append(record)

    log.debug("coordinates_imputed", records=len(records), filled=filled)
    return imputed


def filter_by_year_range(
    records: Sequence[DerivedRecord],
    start_year: int,
    end_year: int,
) -> list[DerivedRecord]:
    """Keep records with start_year <= funding_year <= end_year, in order."""
    return [r for r in records if start_year <= r.funding_year <= end_year]
