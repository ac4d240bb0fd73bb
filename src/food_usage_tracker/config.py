"""Application configuration."""

import os
import re
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from food_usage_tracker.domain.reports import PeriodRange
from food_usage_tracker.services.allocation import EmptyLossFallback

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_MONTH_YEAR = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    export_dir: Path = Path.home() / "Downloads"
    batch_empty_loss_fallback: EmptyLossFallback = EmptyLossFallback.ZERO
    report_empty_loss_fallback: EmptyLossFallback = EmptyLossFallback.TOTAL_CALORIES
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_month_year(raw: str) -> str:
    """Validate a zero-padded YYYY-MM period and return it stripped."""
    cleaned = raw.strip()
    if not _MONTH_YEAR.match(cleaned):
        raise ValueError(f"Invalid month/year {raw!r}, expected YYYY-MM")
    return cleaned


def parse_period(from_month_year: str, to_month_year: str) -> PeriodRange:
    """Validate an inclusive period range of YYYY-MM values."""
    period = PeriodRange(
        from_month_year=parse_month_year(from_month_year),
        to_month_year=parse_month_year(to_month_year),
    )
    if period.from_month_year > period.to_month_year:
        raise ValueError(
            f"Period start {period.from_month_year} is after end {period.to_month_year}"
        )
    return period
