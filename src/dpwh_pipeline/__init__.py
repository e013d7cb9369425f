"""
dpwh_pipeline — batch report pipeline for DPWH flood-control project data.

Architecture:
  sources/     — CSV source adapter (raw text rows, BOM handling)
  transforms/  — row validation and cleaning, derivation, imputation, year filter
  reports/     — regional efficiency, contractor ranking, annual type trends, summary
  exporters/   — cell formatting and CSV/JSON writers
  pipelines/   — load() and generate_reports() entry points over a PipelineSession
  utils/       — structlog configuration

Quick start:
    from dpwh_pipeline.pipelines.flood_control import load, generate_reports

    session = load("data/dpwh_flood_control_projects.csv")
    paths = generate_reports(session, output_dir="output")

CLI:
    dpwh-pipeline load data/dpwh_flood_control_projects.csv
    dpwh-pipeline report --output-dir output

Shared code from dpwh_shared:
    from dpwh_shared.config import settings
    from dpwh_shared.parsing import parse_number, parse_date
    from dpwh_shared.models.projects import CleanedRecord, DerivedRecord
"""

__version__ = "0.1.0"
