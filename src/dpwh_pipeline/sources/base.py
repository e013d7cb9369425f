"""
sources/base.py — Abstract base class for data source adapters.

Each concrete source must implement:
  extract()      — read raw data, return polars DataFrame
  transform()    — tidy the raw DataFrame (whitespace, empty rows)
  get_metadata() — return dict with source info for logging

The run() method orchestrates extract → transform → return and handles
timing/logging automatically. Pipelines call run() rather than the
individual methods.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any

import polars as pl
import structlog

log = structlog.get_logger(__name__)


class BaseSource(ABC):
    """Abstract base for pipeline data source adapters."""

    # Override in subclass — used for logging
    name: str = "unknown"

    def __init__(self) -> None:
        self._log = log.bind(source_name=self.name)

    # ------------------------------------------------------------------
    # Abstract interface — subclasses must implement all three
    # ------------------------------------------------------------------

    @abstractmethod
    def extract(self, **kwargs: Any) -> pl.DataFrame:
        """
        Read raw data from the source.

        Implementations should return every column as text so that no
        value is coerced before the row validator sees it.
        """
        ...

    @abstractmethod
    def transform(self, raw: pl.DataFrame) -> pl.DataFrame:
        """
        Tidy a raw DataFrame without changing cell types.

        Args:
            raw: DataFrame returned by extract().

        Returns:
            DataFrame ready for row-level validation.
        """
        ...

    @abstractmethod
    def get_metadata(self) -> dict[str, Any]:
        """Return source-level metadata for observability."""
        ...

    # ------------------------------------------------------------------
    # Orchestration — pipelines call this
    # ------------------------------------------------------------------

    def run(self, **kwargs: Any) -> pl.DataFrame:
        """
        Extract + transform in sequence with timing and structured logging.

        Args:
            **kwargs: Forwarded to extract().

        Returns:
            Transformed polars DataFrame.

        Raises:
            Any exception from extract() or transform() after logging it.
        """
        run_log = self._log.bind(**{k: str(v) for k, v in kwargs.items()})
        run_log.info("source_run_start")

        t0 = time.monotonic()
        try:
            raw = self.extract(**kwargs)
            run_log.info(
                "extract_complete",
                raw_rows=len(raw),
                raw_cols=raw.width,
                duration_ms=int((time.monotonic() - t0) * 1000),
            )

            t1 = time.monotonic()
            result = self.transform(raw)
            run_log.info(
                "transform_complete",
                result_rows=len(result),
                result_cols=result.width,
                duration_ms=int((time.monotonic() - t1) * 1000),
            )
            return result

        except Exception as exc:
            run_log.error(
                "source_run_failed",
                error=str(exc),
                duration_ms=int((time.monotonic() - t0) * 1000),
                exc_info=True,
            )
            raise

    # ------------------------------------------------------------------
    # Shared helpers available to all subclasses
    # ------------------------------------------------------------------

    @staticmethod
    def _strip_strings(df: pl.DataFrame) -> pl.DataFrame:
        """Strip whitespace from all String columns."""
        return df.with_columns(
            [pl.col(c).str.strip_chars() for c in df.columns if df[c].dtype == pl.String]
        )

    @staticmethod
    def _drop_all_null_rows(
        df: pl.DataFrame, ignore: tuple[str, ...] = ()
    ) -> pl.DataFrame:
        """Drop rows where every column (except `ignore`) is null or blank."""
        columns = [c for c in df.columns if c not in ignore]
        if not columns:
            return df
        return df.filter(
            pl.any_horizontal(
                [pl.col(c).is_not_null() & (pl.col(c) != "") for c in columns]
            )
        )
