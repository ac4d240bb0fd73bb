"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_usage_tracker.adapters.supabase_errors import store_errors
from food_usage_tracker.domain.errors import FoodNotFoundError
from food_usage_tracker.domain.foods import (
    CALORIE_TOLERANCE,
    COMPONENT_CODES,
    AllocationSlot,
    FoodKey,
    FoodRecord,
)
from food_usage_tracker.services.matching import FoodRepository

FOODS_TABLE = "foods"
FOOD_RECORDS_VIEW = "food_records"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for catalog entries."""

    client: Client

    def find_active_foods(self, key: FoodKey) -> list[FoodRecord]:
        """Return active foods by key; calories are bounded by the tolerance."""
        with store_errors("Food lookup"):
            response = (
                self.client.table(FOOD_RECORDS_VIEW)
                .select("*")
                .eq("food_id", key.food_id)
                .eq("origin_name", key.origin_name)
                .eq("food_name", key.food_name)
                .eq("unit", key.unit)
                .eq("active", True)
                .gt("calorie_per_unit", key.calorie_per_unit - CALORIE_TOLERANCE)
                .lt("calorie_per_unit", key.calorie_per_unit + CALORIE_TOLERANCE)
                .order("created_at")
                .execute()
            )
        return [parse_food(row) for row in response.data or []]

    def list_foods(self) -> list[FoodRecord]:
        with store_errors("Food listing"):
            response = (
                self.client.table(FOOD_RECORDS_VIEW)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        return [parse_food(row) for row in response.data or []]

    def get_food(self, food_record_id: UUID) -> FoodRecord | None:
        with store_errors("Food lookup"):
            response = (
                self.client.table(FOOD_RECORDS_VIEW)
                .select("*")
                .eq("id", str(food_record_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return parse_food(response.data[0])

    def create_food(self, payload: dict[str, object]) -> UUID:
        with store_errors("Food creation"):
            response = self.client.table(FOODS_TABLE).insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return UUID(str(response.data[0]["id"]))

    def update_food(
        self, food_record_id: UUID, changes: dict[str, object]
    ) -> FoodRecord:
        with store_errors("Food update"):
            response = (
                self.client.table(FOODS_TABLE)
                .update(changes)
                .eq("id", str(food_record_id))
                .execute()
            )
        if not response.data:
            raise FoodNotFoundError(f"Food {food_record_id} does not exist")
        return self._reload(food_record_id)

    def set_active(self, food_record_id: UUID, active: bool) -> FoodRecord:
        return self.update_food(food_record_id, {"active": active})

    def _reload(self, food_record_id: UUID) -> FoodRecord:
        food = self.get_food(food_record_id)
        if food is None:
            raise FoodNotFoundError(f"Food {food_record_id} does not exist")
        return food


def parse_food(row: dict[str, object]) -> FoodRecord:
    """Parse a ``food_records`` view row into a domain model."""
    return FoodRecord(
        id=UUID(str(row["id"])),
        food_id=str(row.get("food_id") or ""),
        origin_name=str(row.get("origin_name") or ""),
        food_name=str(row.get("food_name") or ""),
        unit=str(row.get("unit") or ""),
        calorie_per_unit=float(row.get("calorie_per_unit") or 0.0),
        calorie_usage=_optional_text(row.get("calorie_usage")),
        slots=tuple(
            AllocationSlot(
                code=code,
                ratio=_optional_text(row.get(f"{code.value.lower()}_ratio")),
                patient=_optional_text(row.get(f"{code.value.lower()}_patient")),
            )
            for code in COMPONENT_CODES
        ),
        loss_ratio=_optional_text(row.get("loss_ratio")),
        destination_name=_optional_text(row.get("destination_name")),
        insurance_type_name=_optional_text(row.get("insurance_type_name")),
        apply_date=_optional_text(row.get("apply_date")),
        active=bool(row.get("active", True)),
    )


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None
