"""
sources/projects.py — DPWH flood-control projects CSV source.

Reads the public-works project export: one header row, comma-delimited,
standard double-quote escaping. Every column is read as text; typing is
left to the row validator so that malformed cells become per-row
diagnostics instead of a failed read.

Expected columns (case-sensitive):
  Region, MainIsland, FundingYear, ApprovedBudgetForContract, ContractCost,
  StartDate, ActualCompletionDate, ProjectLatitude, ProjectLongitude,
  Province, Contractor, TypeOfWork

Usage:
    source = ProjectsCsvSource()
    df = source.run(path=resolve_source_path(None))
    for row_number, row in source.rows(df):
        ...
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import polars as pl
import structlog

from dpwh_shared.config import settings
from dpwh_shared.constants import REQUIRED_COLUMNS
from dpwh_pipeline.errors import SourceNotFoundError
from dpwh_pipeline.sources.base import BaseSource

log = structlog.get_logger(__name__)

# Record index + 2: the header is row 1, the first record row 2. A quoted
# cell spanning lines counts once, so this is not the physical line number.
ROW_NUMBER_COLUMN = "__row_number"

RawRow = dict[str, str | None]


def resolve_source_path(path: Path | str | None = None) -> Path:
    """
    Return the CSV path to load.

    An explicit path must exist. Without one, settings.source_filenames are
    tried in order inside settings.data_dir, then in the working directory.

    Raises:
        SourceNotFoundError: nothing usable was found.
    """
    if path is not None:
        candidate = Path(path)
        if not candidate.is_file():
            raise SourceNotFoundError(candidate)
        return candidate

    searched: list[Path] = []
    for directory in (Path(settings.data_dir), Path.cwd()):
        for name in settings.source_filenames_list:
            candidate = directory / name
            searched.append(candidate)
            if candidate.is_file():
                return candidate
    raise SourceNotFoundError(None, searched)


class ProjectsCsvSource(BaseSource):
    """Reads the flood-control projects CSV into a text-only DataFrame."""

    name = "DPWH-projects-csv"

    def __init__(self) -> None:
        super().__init__()
        self._path: Path | None = None
        self._rows = 0
        self._columns: list[str] = []

    # ------------------------------------------------------------------
    # BaseSource interface
    # ------------------------------------------------------------------

    def extract(self, *, path: Path | str, **kwargs: Any) -> pl.DataFrame:
        """
        Read the CSV file at `path`.

        Returns:
            DataFrame of String columns plus ROW_NUMBER_COLUMN. An empty
            file gives an empty DataFrame.

        Raises:
            SourceNotFoundError: the file does not exist.
        """
        self._path = Path(path)
        try:
            raw_bytes = self._path.read_bytes()
        except FileNotFoundError as exc:
            raise SourceNotFoundError(self._path) from exc

        # Handle UTF-8 BOM
        if raw_bytes.startswith(b"\xef\xbb\xbf"):
            raw_bytes = raw_bytes[3:]

        if not raw_bytes.strip():
            return pl.DataFrame()

        try:
            df = pl.read_csv(
                io.BytesIO(raw_bytes),
                infer_schema_length=0,
                truncate_ragged_lines=True,
                encoding="utf8-lossy",
            )
        except pl.exceptions.NoDataError:
            return pl.DataFrame()

        return df.with_row_index(ROW_NUMBER_COLUMN, offset=2)

    def transform(self, raw: pl.DataFrame) -> pl.DataFrame:
        """Strip cell whitespace and drop fully blank rows."""
        if raw.is_empty():
            self._rows, self._columns = 0, list(raw.columns)
            return raw

        missing = [c for c in REQUIRED_COLUMNS if c not in raw.columns]
        if missing:
            self._log.warning("missing_columns", columns=missing)

        df = self._strip_strings(raw)
        df = self._drop_all_null_rows(df, ignore=(ROW_NUMBER_COLUMN,))

        self._rows = len(df)
        self._columns = [c for c in df.columns if c != ROW_NUMBER_COLUMN]
        return df

    def get_metadata(self) -> dict[str, Any]:
        return {
            "source_name": self.name,
            "path": str(self._path) if self._path else None,
            "record_count": self._rows,
            "columns": self._columns,
            "description": "DPWH flood control projects export",
        }

    # ------------------------------------------------------------------
    # Row access
    # ------------------------------------------------------------------

    @staticmethod
    def rows(df: pl.DataFrame) -> Iterator[tuple[int, RawRow]]:
        """Yield (record number, raw row) pairs in file order."""
        if df.is_empty():
            return
        has_numbers = ROW_NUMBER_COLUMN in df.columns
        for index, row in enumerate(df.iter_rows(named=True)):
            row_number = row.pop(ROW_NUMBER_COLUMN) if has_numbers else index + 2
            yield int(row_number), row
