"""Domain models for monthly usage calculation."""

from dataclasses import dataclass, field
from uuid import UUID

from food_usage_tracker.domain.foods import ComponentCode, FoodRecord

NOT_FOUND_REASON = "Not found in database or inactive"


@dataclass(frozen=True)
class UsageInputRow:
    """One row of a monthly usage import."""

    food_id: str
    origin_name: str
    food_name: str
    unit: str
    value: float
    quantity: float
    month_year: str | None = None


@dataclass(frozen=True)
class ComponentAllocation:
    """Calories allocated to one component for a usage row."""

    code: ComponentCode
    ratio: float | None
    calories: int | None
    patient: str | None

    @property
    def label(self) -> str:
        return self.code.label


@dataclass(frozen=True)
class AllocationResult:
    """Calculator output for one food and quantity."""

    total_calories: float
    used_calories: int
    components: tuple[ComponentAllocation, ...]
    loss_ratio: float | None
    remaining_calories: int


@dataclass(frozen=True)
class UsageCalculationRow:
    """Usage input row resolved against a catalog entry."""

    id: UUID
    food_id: str
    origin_name: str
    food_name: str
    unit: str
    value: float
    quantity: float
    month_year: str | None
    selected_month_year: str
    total_calories: float
    used_calories: int
    components: tuple[ComponentAllocation, ...]
    loss_ratio: float | None
    remaining_calories: int
    destination_name: str | None = None
    insurance_type_name: str | None = None
    apply_date: str | None = None
    active: bool = True

    def component(self, code: ComponentCode) -> ComponentAllocation:
        """Return the allocation for a component code."""
        for allocation in self.components:
            if allocation.code is code:
                return allocation
        return ComponentAllocation(code=code, ratio=None, calories=None, patient=None)


@dataclass(frozen=True)
class UsageNotFoundItem:
    """Usage input row without an active catalog match."""

    food_id: str
    origin_name: str
    food_name: str
    unit: str
    value: float
    reason: str = NOT_FOUND_REASON


@dataclass
class BatchResult:
    """Result of calculating one import batch."""

    success: bool
    calculated_data: list[UsageCalculationRow] = field(default_factory=list)
    not_found_items: list[UsageNotFoundItem] = field(default_factory=list)
    not_found_file_path: str | None = None


@dataclass(frozen=True)
class StoredUsage:
    """Persisted usage record joined with its catalog entry."""

    food: FoodRecord
    sample_date: str | None
    quantity: float
    import_month_year: str
