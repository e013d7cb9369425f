"""
dpwh_shared.models — Pydantic models for pipeline records and outputs.

Records are frozen: each pipeline stage builds new instances instead of
mutating the ones it received.
"""

from dpwh_shared.models.projects import (
    CleanedRecord,
    DerivedRecord,
    SummaryStats,
    ValidationResult,
)

__all__ = [
    "ValidationResult",
    "CleanedRecord",
    "DerivedRecord",
    "SummaryStats",
]
