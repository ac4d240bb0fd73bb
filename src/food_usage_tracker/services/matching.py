"""Resolution of usage input rows to catalog entries."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from food_usage_tracker.domain.foods import FoodKey, FoodRecord

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def find_active_foods(self, key: FoodKey) -> list[FoodRecord]:
        """Return active foods matching the key within calorie tolerance."""

    def list_foods(self) -> list[FoodRecord]:
        """Return all foods, active or not."""

    def get_food(self, food_record_id: UUID) -> FoodRecord | None:
        """Return a food by store id, if present."""

    def create_food(self, payload: dict[str, object]) -> UUID:
        """Create a food row and return its id."""

    def update_food(
        self, food_record_id: UUID, changes: dict[str, object]
    ) -> FoodRecord:
        """Update mutable columns of a food row and return it."""

    def set_active(self, food_record_id: UUID, active: bool) -> FoodRecord:
        """Activate or retire a food row and return it."""


@dataclass
class FoodMatcher:
    """Looks up the single active catalog entry for a usage row."""

    repository: FoodRepository

    def find_food(  # noqa: PLR0913
        self,
        food_id: str,
        origin_name: str,
        food_name: str,
        unit: str,
        stated_value: float,
    ) -> FoodRecord | None:
        """Return the active food for the key, or None when nothing matches."""
        key = FoodKey(
            food_id=food_id,
            origin_name=origin_name,
            food_name=food_name,
            unit=unit,
            calorie_per_unit=stated_value,
        )
        matches = [
            food
            for food in self.repository.find_active_foods(key)
            if food.active and food.key.matches(key)
        ]
        if not matches:
            return None
        if len(matches) > 1:
            _logger.warning(
                "Multiple active foods share key %s; using %s (candidates: %s)",
                key,
                matches[0].id,
                ", ".join(str(food.id) for food in matches),
            )
        return matches[0]
