"""
sources — data source adapters.

Each adapter subclasses BaseSource and returns a polars DataFrame of raw
text cells from extract(); transform() tidies it without typing values.
"""

from dpwh_pipeline.sources.base import BaseSource
from dpwh_pipeline.sources.projects import ProjectsCsvSource, resolve_source_path

__all__ = ["BaseSource", "ProjectsCsvSource", "resolve_source_path"]
