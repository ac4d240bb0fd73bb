"""Supabase implementation for saved usage records."""

import logging
from dataclasses import dataclass

from supabase import Client

from food_usage_tracker.adapters.supabase_errors import store_errors
from food_usage_tracker.adapters.supabase_food_repository import parse_food
from food_usage_tracker.domain.foods import COMPONENT_CODES, ComponentCode
from food_usage_tracker.domain.reports import PeriodRange
from food_usage_tracker.domain.usage import StoredUsage, UsageCalculationRow
from food_usage_tracker.services.usage import UsageRepository

_logger = logging.getLogger(__name__)

USAGE_RECORDS_VIEW = "usage_records_view"
REPLACE_FUNCTION = "replace_usage_records"


@dataclass
class SupabaseUsageRepository(UsageRepository):
    """Supabase-backed repository for monthly usage."""

    client: Client

    def replace_period(
        self, import_month_year: str, rows: list[UsageCalculationRow]
    ) -> int:
        """Replace a period in one database transaction via a stored function."""
        records = [
            {
                "food_record_id": str(row.id),
                "sample_date": row.month_year,
                "quantity": row.quantity,
            }
            for row in rows
        ]
        with store_errors("Usage save"):
            response = self.client.rpc(
                REPLACE_FUNCTION,
                {"p_import_month_year": import_month_year, "p_records": records},
            ).execute()
        saved = _count(response.data, default=len(records))
        _logger.info("Replaced usage for %s with %s records", import_month_year, saved)
        return saved

    def list_usage(
        self,
        period: PeriodRange,
        *,
        patient: str | None = None,
        component: ComponentCode | None = None,
        food_id: str | None = None,
    ) -> list[StoredUsage]:
        """Return usage within the period joined with its food, newest first."""
        query = (
            self.client.table(USAGE_RECORDS_VIEW)
            .select("*")
            .gte("import_month_year", period.from_month_year)
            .lte("import_month_year", period.to_month_year)
        )
        if food_id is not None:
            query = query.eq("food_id", food_id)
        if patient is not None and component is not None:
            query = query.eq(f"{component.value.lower()}_patient", patient)
        elif patient is not None:
            query = query.or_(
                ",".join(
                    f"{code.value.lower()}_patient.eq.{_quoted(patient)}"
                    for code in COMPONENT_CODES
                )
            )
        elif component is not None:
            query = query.not_.is_(f"{component.value.lower()}_ratio", "null")
        with store_errors("Usage listing"):
            response = query.order("usage_created_at", desc=True).execute()
        return [_parse_usage(row) for row in response.data or []]


def _parse_usage(row: dict[str, object]) -> StoredUsage:
    sample_date = row.get("sample_date")
    return StoredUsage(
        food=parse_food(row),
        sample_date=str(sample_date) if sample_date else None,
        quantity=float(row.get("quantity") or 0.0),
        import_month_year=str(row.get("import_month_year") or ""),
    )


def _quoted(value: str) -> str:
    """Quote a value for a PostgREST logical filter."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _count(data: object, default: int) -> int:
    if isinstance(data, int):
        return data
    if isinstance(data, list) and data and isinstance(data[0], int):
        return data[0]
    return default
