"""
errors.py — Fatal pipeline failures.

Row-level problems never raise; they are collected as diagnostics. The
exceptions here abort a run and carry a `reason` code the caller can
switch on without parsing messages.
"""

from __future__ import annotations

from pathlib import Path


class PipelineError(RuntimeError):
    """Base class for failures that abort a pipeline run."""

    reason: str = "pipeline_error"


class SourceNotFoundError(PipelineError):
    reason = "source_missing"

    def __init__(self, path: Path | str | None, searched: list[Path] | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self.searched = searched or []
        if self.path is not None:
            message = f"Source file not found: {self.path}"
        else:
            message = "Source file not found. Looked for: " + ", ".join(
                str(p) for p in self.searched
            )
        super().__init__(message)


class EmptyDatasetError(PipelineError):
    reason = "no_valid_rows"

    def __init__(self, rows_loaded: int, message: str | None = None) -> None:
        self.rows_loaded = rows_loaded
        super().__init__(
            message or f"No valid rows to report on ({rows_loaded} rows loaded)"
        )


class ExportError(PipelineError):
    reason = "write_failed"

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        super().__init__(f"Could not write {path}: {cause}")
