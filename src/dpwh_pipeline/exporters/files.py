"""
exporters/files.py — CSV and JSON writers for report output.

Both writers create the parent directory when needed, write UTF-8 with
"\n" line endings, and raise ExportError on any OS-level failure. Output is
a pure function of the input, so rewriting the same reports yields
byte-identical files.
"""

from __future__ import annotations

import json
from pathlib import Path

import polars as pl
import structlog

from dpwh_shared.models.projects import SummaryStats
from dpwh_pipeline.errors import ExportError

log = structlog.get_logger(__name__)


def _write_bytes(path: Path, payload: bytes) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
    except OSError as exc:
        log.error("export_failed", path=str(path), error=str(exc))
        raise ExportError(path, exc) from exc
    log.info("report_written", path=str(path), bytes=len(payload))
    return path


def write_report_csv(df: pl.DataFrame, path: Path | str) -> Path:
    """
    Write a formatted report frame as CSV.

    Fields containing a comma, double quote or newline are quoted, with
    embedded quotes doubled.
    """
    text = df.write_csv(
        separator=",",
        quote_char='"',
        quote_style="necessary",
        line_terminator="\n",
    )
    return _write_bytes(Path(path), text.encode("utf-8"))


def write_summary_json(stats: SummaryStats, path: Path | str) -> Path:
    """Write summary statistics as indented JSON, keys in model order."""
    text = json.dumps(stats.model_dump(), indent=2) + "\n"
    return _write_bytes(Path(path), text.encode("utf-8"))
