"""
tests/test_pipelines/test_flood_control.py — End-to-end tests for the report pipeline.

Tests cover:
  - Loading: counts, row errors, silent drops, imputation
  - Report files: exact CSV/JSON content for the sample dataset
  - Contractor ranking from a generated CSV
  - Failure reasons: missing source, no valid rows, nothing loaded
  - Idempotent output
"""

from __future__ import annotations

import json

import pytest

from dpwh_pipeline.errors import EmptyDatasetError, SourceNotFoundError
from dpwh_pipeline.pipelines.flood_control import (
    LoadDiagnostics,
    PipelineSession,
    generate_reports,
    load,
    run,
)
from dpwh_pipeline.transforms.validate import RowError


# ---------------------------------------------------------------------------
# load()
# ---------------------------------------------------------------------------

class TestLoad:
    def test_counts(self, sample_csv):
        session = load(sample_csv)
        diag = session.diagnostics
        assert isinstance(session, PipelineSession)
        assert diag.rows_loaded == 8
        assert diag.rows_valid == 4
        assert diag.rows_retained == 4
        assert diag.rows_unparseable == 1
        assert len(session.records) == 4

    def test_row_errors(self, sample_csv):
        errors = load(sample_csv).diagnostics.row_errors
        assert errors == (
            RowError(6, ("Missing Region",)),
            RowError(7, ("Invalid FundingYear: 2019",)),
            RowError(8, ("Missing MainIsland", "Missing ApprovedBudgetForContract")),
        )

    def test_derived_and_imputed_values(self, sample_csv):
        records = load(sample_csv).records
        assert [r.cost_savings for r in records] == [100000.0, -100000.0, 100000.0, 50000.0]
        assert [r.completion_delay_days for r in records] == [45, 20, 10, None]
        assert records[1].latitude == pytest.approx(14.6)
        assert records[1].longitude == pytest.approx(121.0)
        assert records[3].latitude == pytest.approx(10.3)
        assert records[3].contractor == "Unknown"

    def test_custom_year_window(self, sample_csv):
        session = load(sample_csv, start_year=2022, end_year=2023)
        assert [r.funding_year for r in session.records] == [2022, 2023]
        assert (session.start_year, session.end_year) == (2022, 2023)

    def test_inverted_year_window(self, sample_csv):
        with pytest.raises(ValueError, match="start_year"):
            load(sample_csv, start_year=2023, end_year=2021)

    def test_missing_source(self, tmp_path):
        with pytest.raises(SourceNotFoundError) as excinfo:
            load(tmp_path / "missing.csv")
        assert excinfo.value.reason == "source_missing"

    def test_no_valid_rows(self, write_csv, make_row):
        path = write_csv([make_row(Region=""), make_row(FundingYear="2010")])
        with pytest.raises(EmptyDatasetError) as excinfo:
            load(path)
        assert excinfo.value.reason == "no_valid_rows"
        assert excinfo.value.rows_loaded == 2


class TestLoadDiagnosticsPreview:
    def test_short_list_shown_in_full(self):
        diag = LoadDiagnostics(row_errors=(RowError(2, ("Missing Region",)),))
        assert diag.preview(limit=10) == ["Row 2: Missing Region"]

    def test_capped_with_remaining_note(self):
        errors = tuple(RowError(n, ("Missing Region",)) for n in range(2, 17))
        lines = LoadDiagnostics(row_errors=errors).preview(limit=10)
        assert len(lines) == 11
        assert lines[0] == "Row 2: Missing Region"
        assert lines[-1] == "... and 5 more errors"

    def test_no_errors(self):
        assert LoadDiagnostics().preview() == []


# ---------------------------------------------------------------------------
# generate_reports()
# ---------------------------------------------------------------------------

class TestGenerateReports:
    def test_writes_four_files_in_order(self, sample_csv, tmp_path):
        paths = generate_reports(load(sample_csv), tmp_path / "out")
        assert [p.name for p in paths] == [
            "report1_regional_efficiency.csv",
            "report2_contractor_ranking.csv",
            "report3_cost_overrun_trends.csv",
            "summary.json",
        ]
        assert all(p.is_file() for p in paths)

    def test_report1_content(self, sample_csv, tmp_path):
        paths = generate_reports(load(sample_csv), tmp_path)
        assert paths[0].read_text(encoding="utf-8") == (
            "Region,MainIsland,TotalBudget,MedianSavings,AvgDelay,HighDelayPct,EfficiencyScore\n"
            'Region VII,Visayas,"1,300,000","75,000.00",10.00,0.00,100.00\n'
            'NCR,Luzon,"3,000,000",0.00,32.50,50.00,0.00\n'
        )

    def test_report2_empty_when_no_contractor_qualifies(self, sample_csv, tmp_path):
        paths = generate_reports(load(sample_csv), tmp_path)
        assert paths[1].read_text(encoding="utf-8") == (
            "Rank,Contractor,TotalCost,NumProjects,AvgDelay,TotalSavings,"
            "ReliabilityIndex,RiskFlag\n"
        )

    def test_report3_content(self, sample_csv, tmp_path):
        paths = generate_reports(load(sample_csv), tmp_path)
        assert paths[2].read_text(encoding="utf-8") == (
            "FundingYear,TypeOfWork,TotalProjects,AvgSavings,OverrunRate,YoYChange\n"
            '2021,Drainage,1,"100,000.00",0.00,0.00\n'
            '2021,Flood Control,1,"100,000.00",0.00,0.00\n'
            '2022,Flood Control,1,"-100,000.00",100.00,-200.00\n'
            '2023,Drainage,1,"50,000.00",0.00,-50.00\n'
        )

    def test_summary_content(self, sample_csv, tmp_path):
        paths = generate_reports(load(sample_csv), tmp_path)
        assert json.loads(paths[3].read_text(encoding="utf-8")) == {
            "total_projects": 4,
            "total_contractors": 2,
            "total_provinces": 2,
            "global_avg_delay": 25.0,
            "total_savings": 150000,
        }

    def test_contractor_ranking_end_to_end(self, write_csv, make_row, tmp_path):
        path = write_csv([make_row(Contractor="A") for _ in range(5)])
        paths = generate_reports(load(path), tmp_path / "out")
        lines = paths[1].read_text(encoding="utf-8").splitlines()
        assert lines[1:] == ['1,A,"4,500,000",5,45.00,"500,000",5.56,High Risk']

    def test_accepts_plain_record_sequence(self, sample_csv, tmp_path):
        records = list(load(sample_csv).records)
        assert len(generate_reports(records, tmp_path)) == 4

    def test_idempotent_output(self, sample_csv, tmp_path):
        session = load(sample_csv)
        first = [p.read_bytes() for p in generate_reports(session, tmp_path / "a")]
        second = [p.read_bytes() for p in generate_reports(session, tmp_path / "a")]
        assert first == second

    def test_nothing_loaded(self, tmp_path):
        with pytest.raises(EmptyDatasetError):
            generate_reports([], tmp_path)
        assert not any(tmp_path.iterdir())


class TestRun:
    def test_load_and_generate(self, sample_csv, tmp_path):
        session, paths = run(sample_csv, tmp_path)
        assert session.diagnostics.rows_retained == 4
        assert len(paths) == 4
