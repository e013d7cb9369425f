"""
config.py — pydantic-settings Settings class.

All environment variables for the pipeline are declared here, prefixed
with DPWH_ (e.g. DPWH_OUTPUT_DIR, DPWH_LOG_FORMAT).

Usage:
    from dpwh_shared.config import settings
    print(settings.output_dir)
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_dotenv() -> Path | None:
    """Walk up from CWD to find the nearest .env file."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        candidate = parent / ".env"
        if candidate.is_file():
            return candidate
    return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DPWH_",
        env_file=_find_dotenv() or ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------
    data_dir: Path = Field(default=Path("./data"))
    source_filenames: str = Field(
        default="dpwh_flood_control_projects.csv,dpwh_flood_control_projects-1.csv"
    )
    output_dir: Path = Field(default=Path("./output"))

    # -------------------------------------------------------------------------
    # Pipeline parameters
    # -------------------------------------------------------------------------
    start_year: int = Field(default=2021)
    end_year: int = Field(default=2023)
    baseline_year: int = Field(default=2021)
    min_contractor_projects: int = Field(default=5, ge=1)
    top_contractors: int = Field(default=15, ge=1)
    high_delay_days: int = Field(default=30)
    error_preview_limit: int = Field(default=10, ge=0)

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "console"] = Field(default="console")

    # -------------------------------------------------------------------------
    # Derived / computed
    # -------------------------------------------------------------------------
    @property
    def source_filenames_list(self) -> list[str]:
        return [f.strip() for f in self.source_filenames.split(",") if f.strip()]

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_year_window(self) -> "Settings":
        if self.start_year > self.end_year:
            raise ValueError(
                f"start_year ({self.start_year}) must not exceed end_year ({self.end_year})"
            )
        return self


# ---------------------------------------------------------------------------
# Module-level singleton — import this everywhere
# ---------------------------------------------------------------------------
settings = Settings()
