"""
dpwh_shared — configuration, constants, parsers, and record models for the
DPWH flood-control project pipeline.

Usage:
    from dpwh_shared.config import settings
    from dpwh_shared.parsing import parse_number, parse_date
    from dpwh_shared.models.projects import CleanedRecord, DerivedRecord, SummaryStats
    from dpwh_shared.constants import REQUIRED_COLUMNS, REPORT1_FILENAME
"""

__version__ = "0.1.0"
