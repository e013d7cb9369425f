"""
dpwh_pipeline.exporters — cell formatting and file writers for report output.
"""

from dpwh_pipeline.exporters.files import write_report_csv, write_summary_json
from dpwh_pipeline.exporters.formatting import (
    format_large_number,
    format_number,
    format_report,
)

__all__ = [
    "format_large_number",
    "format_number",
    "format_report",
    "write_report_csv",
    "write_summary_json",
]
