"""Tests for configuration helpers."""

import pytest

from food_usage_tracker.config import Settings, parse_month_year, parse_period
from food_usage_tracker.services.allocation import EmptyLossFallback


def test_settings_read_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "header.payload.signature")
    monkeypatch.setenv("API_TOKEN", "token")
    monkeypatch.setenv("EXPORT_DIR", str(tmp_path))
    monkeypatch.setenv("BATCH_EMPTY_LOSS_FALLBACK", "total_calories")

    settings = Settings()

    assert settings.export_dir == tmp_path
    assert settings.batch_empty_loss_fallback is EmptyLossFallback.TOTAL_CALORIES
    assert settings.report_empty_loss_fallback is EmptyLossFallback.TOTAL_CALORIES


def test_parse_month_year() -> None:
    assert parse_month_year(" 2025-06 ") == "2025-06"
    for raw in ("2025-6", "2025-13", "2025-00", "06-2025", ""):
        with pytest.raises(ValueError):
            parse_month_year(raw)


def test_parse_period_is_ordered() -> None:
    period = parse_period("2025-01", "2025-06")

    assert period.from_month_year == "2025-01"
    assert period.to_month_year == "2025-06"
    with pytest.raises(ValueError):
        parse_period("2025-06", "2025-01")
