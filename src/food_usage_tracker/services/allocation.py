"""Calorie allocation for a catalog entry and a usage quantity."""

import math
from dataclasses import dataclass
from enum import Enum

from food_usage_tracker.domain.foods import AllocationSlot, FoodRecord
from food_usage_tracker.domain.ratios import Ratio, RatioKind, round_calories
from food_usage_tracker.domain.usage import AllocationResult, ComponentAllocation


class EmptyLossFallback(str, Enum):
    """Remaining calories used when a food has no loss ratio."""

    ZERO = "zero"
    TOTAL_CALORIES = "total_calories"


@dataclass
class AllocationCalculator:
    """Computes total, used, allocated and remaining calories.

    Percentage-style ratios (below one) scale the per-unit calories, while
    absolute ratios are calories per unit of quantity. The five components are
    computed independently, so one patient may appear in several of them.
    """

    empty_loss_fallback: EmptyLossFallback = EmptyLossFallback.ZERO

    def calculate(
        self,
        food: FoodRecord,
        quantity: float,
        stated_value: float | None = None,
    ) -> AllocationResult:
        """Allocate calories for ``quantity`` units of ``food``."""
        per_unit = food.calorie_per_unit
        value = per_unit if stated_value is None else stated_value
        total_calories = value * quantity
        if not math.isfinite(total_calories):
            raise ValueError(
                f"Total calories out of range for {food.food_id} x {quantity}"
            )

        components = tuple(
            _allocate_slot(slot, per_unit, quantity) for slot in food.slots
        )

        loss = Ratio.parse(food.loss_ratio)
        remaining = loss.allocate(per_unit, quantity)
        if remaining is None:
            remaining = self._empty_loss_remaining(total_calories)

        return AllocationResult(
            total_calories=total_calories,
            used_calories=used_calories(food.calorie_usage, total_calories, quantity),
            components=components,
            loss_ratio=loss.value,
            remaining_calories=remaining,
        )

    def _empty_loss_remaining(self, total_calories: float) -> int:
        if self.empty_loss_fallback is EmptyLossFallback.TOTAL_CALORIES:
            return round_calories(total_calories)
        return 0


def used_calories(raw_usage: object, total_calories: float, quantity: float) -> int:
    """Return used calories for a stored calorie-usage value.

    A share is taken of the total calories; absolute values are multiplied by
    the quantity. Empty or malformed values count as zero.
    """
    usage = Ratio.parse(raw_usage)
    if usage.value is None:
        return 0
    if usage.kind is RatioKind.PERCENTAGE:
        return round_calories(usage.value * total_calories)
    return round_calories(usage.value * quantity)


def _allocate_slot(
    slot: AllocationSlot, per_unit: float, quantity: float
) -> ComponentAllocation:
    ratio = Ratio.parse(slot.ratio)
    return ComponentAllocation(
        code=slot.code,
        ratio=ratio.value,
        calories=ratio.allocate(per_unit, quantity),
        patient=slot.patient,
    )
