"""
dpwh_pipeline.reports — aggregators over the filtered record set.

Each report function takes the records (or their frame) and returns a
numeric polars DataFrame in output column order; formatting happens in
exporters.
"""

from dpwh_pipeline.reports.contractors import contractor_ranking
from dpwh_pipeline.reports.regional import regional_efficiency
from dpwh_pipeline.reports.summary import summarize
from dpwh_pipeline.reports.trends import annual_type_trends

__all__ = [
    "regional_efficiency",
    "contractor_ranking",
    "annual_type_trends",
    "summarize",
]
