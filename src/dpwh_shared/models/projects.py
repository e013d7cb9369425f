"""
models/projects.py — Pydantic models for flood-control project records.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dpwh_shared.constants import UNKNOWN


class ValidationResult(BaseModel):
    """Outcome of checking one raw row; errors keep check order."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: tuple[str, ...] = ()


class CleanedRecord(BaseModel):
    """Typed projection of a raw row that passed validation."""

    model_config = ConfigDict(frozen=True)

    region: str = Field(min_length=1)
    main_island: str = Field(min_length=1)
    funding_year: int
    approved_budget: float = Field(ge=0)
    contract_cost: float = Field(ge=0)
    start_date: date | None = None
    actual_completion_date: date | None = None
    latitude: float | None = None
    longitude: float | None = None
    province: str = ""
    contractor: str = UNKNOWN
    type_of_work: str = UNKNOWN


class DerivedRecord(CleanedRecord):
    """CleanedRecord plus cost savings and completion delay.

    Imputed and year-filtered records share this type; those stages only
    replace coordinates or drop records.
    """

    cost_savings: float
    completion_delay_days: int | None = None

    @classmethod
    def from_cleaned(
        cls,
        record: CleanedRecord,
        *,
        cost_savings: float,
        completion_delay_days: int | None,
    ) -> "DerivedRecord":
        return cls(
            **record.model_dump(),
            cost_savings=cost_savings,
            completion_delay_days=completion_delay_days,
        )

    def to_row_dict(self) -> dict[str, Any]:
        return self.model_dump()


class SummaryStats(BaseModel):
    """Whole-dataset statistics written to summary.json."""

    model_config = ConfigDict(frozen=True)

    total_projects: int
    total_contractors: int
    total_provinces: int
    global_avg_delay: float
    total_savings: int
