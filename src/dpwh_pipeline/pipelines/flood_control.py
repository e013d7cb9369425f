"""
pipelines/flood_control.py — Flood-control projects report pipeline.

Stages (each returns a new sequence):
  CSV rows → validate/clean → derive savings & delay → impute coordinates
  → year filter → {report1, report2, report3, summary} → files

State between the two entry points lives in a PipelineSession owned by
the caller; nothing is kept at module level.

Usage:
    from dpwh_pipeline.pipelines.flood_control import generate_reports, load, run

    session = load("data/dpwh_flood_control_projects.csv")
    for line in session.diagnostics.preview():
        print(line)
    paths = generate_reports(session, output_dir="output")

    # Or both at once
    session, paths = run()
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from dpwh_shared.config import settings
from dpwh_shared.constants import (
    DEFAULT_END_YEAR,
    DEFAULT_START_YEAR,
    REPORT1_FILENAME,
    REPORT2_FILENAME,
    REPORT3_FILENAME,
    SUMMARY_FILENAME,
)
from dpwh_shared.models.projects import DerivedRecord
from dpwh_pipeline.errors import EmptyDatasetError
from dpwh_pipeline.exporters.files import write_report_csv, write_summary_json
from dpwh_pipeline.exporters.formatting import format_report
from dpwh_pipeline.reports.base import records_to_frame
from dpwh_pipeline.reports.contractors import contractor_ranking
from dpwh_pipeline.reports.regional import regional_efficiency
from dpwh_pipeline.reports.summary import summarize
from dpwh_pipeline.reports.trends import annual_type_trends
from dpwh_pipeline.sources.projects import ProjectsCsvSource, resolve_source_path
from dpwh_pipeline.transforms.derive import (
    add_derived_fields,
    filter_by_year_range,
    impute_coordinates,
)
from dpwh_pipeline.transforms.validate import RowError, clean_rows
from dpwh_pipeline.utils.logging import configure_logging, get_logger

log = get_logger(__name__, pipeline="flood_control")


@dataclass(frozen=True)
class LoadDiagnostics:
    """Counters and row errors gathered while loading."""

    rows_loaded: int = 0
    rows_valid: int = 0
    rows_retained: int = 0
    rows_unparseable: int = 0
    row_errors: tuple[RowError, ...] = ()

    @property
    def error_count(self) -> int:
        return len(self.row_errors)

    def preview(self, limit: int | None = None) -> list[str]:
        """First `limit` error lines, plus a note counting the rest."""
        limit = settings.error_preview_limit if limit is None else limit
        lines = [str(e) for e in self.row_errors[:limit]]
        remaining = self.error_count - len(lines)
        if remaining > 0:
            lines.append(f"... and {remaining} more errors")
        return lines


@dataclass(frozen=True)
class PipelineSession:
    """A loaded, filtered dataset ready for report generation."""

    source_path: Path
    records: tuple[DerivedRecord, ...]
    diagnostics: LoadDiagnostics = field(default_factory=LoadDiagnostics)
    start_year: int = DEFAULT_START_YEAR
    end_year: int = DEFAULT_END_YEAR


def load(
    source_path: Path | str | None = None,
    *,
    start_year: int | None = None,
    end_year: int | None = None,
) -> PipelineSession:
    """
    Read, clean, derive, impute, and year-filter the projects CSV.

    Args:
        source_path: CSV to read; None searches settings.data_dir.
        start_year:  Inclusive lower year bound (default settings.start_year).
        end_year:    Inclusive upper year bound (default settings.end_year).

    Returns:
        PipelineSession holding the filtered records and diagnostics.

    Raises:
        SourceNotFoundError: the CSV could not be found.
        EmptyDatasetError:   no rows survived cleaning and filtering.
    """
    start_year = settings.start_year if start_year is None else start_year
    end_year = settings.end_year if end_year is None else end_year
    if start_year > end_year:
        raise ValueError(f"start_year ({start_year}) must not exceed end_year ({end_year})")

    path = resolve_source_path(source_path)
    run_log = log.bind(source_path=str(path), start_year=start_year, end_year=end_year)

    source = ProjectsCsvSource()
    df = source.run(path=path)

    outcome = clean_rows(source.rows(df), start_year=start_year, end_year=end_year)
    derived = [add_derived_fields(r) for r in outcome.records]
    imputed = impute_coordinates(derived)
    filtered = filter_by_year_range(imputed, start_year, end_year)

    diagnostics = LoadDiagnostics(
        rows_loaded=outcome.rows_seen,
        rows_valid=len(outcome.records),
        rows_retained=len(filtered),
        rows_unparseable=outcome.unparseable,
        row_errors=tuple(outcome.errors),
    )

    if diagnostics.row_errors:
        run_log.warning(
            "validation_errors",
            invalid_rows=diagnostics.error_count,
            preview=diagnostics.preview(),
        )
    if diagnostics.rows_unparseable:
        run_log.info("rows_dropped_unparseable", count=diagnostics.rows_unparseable)

    run_log.info(
        "rows_loaded",
        loaded=diagnostics.rows_loaded,
        valid=diagnostics.rows_valid,
        retained=diagnostics.rows_retained,
    )

    if not filtered:
        raise EmptyDatasetError(diagnostics.rows_loaded)

    return PipelineSession(
        source_path=path,
        records=tuple(filtered),
        diagnostics=diagnostics,
        start_year=start_year,
        end_year=end_year,
    )


def generate_reports(
    data: PipelineSession | Sequence[DerivedRecord],
    output_dir: Path | str | None = None,
) -> list[Path]:
    """
    Build and write the three CSV reports and summary.json.

    Files are written in order report1, report2, report3, summary; a write
    failure stops the run and leaves earlier files in place.

    Returns:
        Paths written, in write order.

    Raises:
        EmptyDatasetError: no records were supplied.
        ExportError:       a file could not be written.
    """
    records = data.records if isinstance(data, PipelineSession) else tuple(data)
    if not records:
        raise EmptyDatasetError(0, "No data loaded; run load() first")

    out = Path(output_dir) if output_dir is not None else Path(settings.output_dir)
    frame = records_to_frame(records)
    log.info("reports_start", records=len(records), output_dir=str(out))

    report1 = regional_efficiency(frame, high_delay_days=settings.high_delay_days)
    report2 = contractor_ranking(
        frame,
        min_projects=settings.min_contractor_projects,
        top_n=settings.top_contractors,
    )
    report3 = annual_type_trends(frame, baseline_year=settings.baseline_year)
    summary = summarize(frame)

    paths = [
        write_report_csv(format_report(report1), out / REPORT1_FILENAME),
        write_report_csv(format_report(report2), out / REPORT2_FILENAME),
        write_report_csv(format_report(report3), out / REPORT3_FILENAME),
        write_summary_json(summary, out / SUMMARY_FILENAME),
    ]

    log.info("reports_complete", files=[str(p) for p in paths])
    return paths


def run(
    source_path: Path | str | None = None,
    output_dir: Path | str | None = None,
) -> tuple[PipelineSession, list[Path]]:
    """
    Load the CSV and write every report.

    Args:
        source_path: CSV to read; None searches settings.data_dir.
        output_dir:  Report directory; None uses settings.output_dir.

    Returns:
        (session, written paths).
    """
    configure_logging()
    session = load(source_path)
    return session, generate_reports(session, output_dir)
