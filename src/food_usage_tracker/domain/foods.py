"""Domain models for the food catalog."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

CALORIE_TOLERANCE = 0.01


class ComponentCode(str, Enum):
    """Allocation components, in catalog column order."""

    HH_1_1 = "HH_1_1"
    HH_2_1 = "HH_2_1"
    HH_2_2 = "HH_2_2"
    HH_2_3 = "HH_2_3"
    HH_3_1 = "HH_3_1"

    @property
    def label(self) -> str:
        """Display label, e.g. ``HH 1.1``."""
        _, major, minor = self.value.split("_")
        return f"HH {major}.{minor}"

    @classmethod
    def from_label(cls, label: str) -> "ComponentCode":
        """Resolve a code from either ``HH_1_1`` or ``HH 1.1``."""
        normalized = label.strip().upper().replace(" ", "_").replace(".", "_")
        return cls(normalized)


COMPONENT_CODES: tuple[ComponentCode, ...] = tuple(ComponentCode)


@dataclass(frozen=True)
class FoodKey:
    """Natural key of a catalog entry."""

    food_id: str
    origin_name: str
    food_name: str
    unit: str
    calorie_per_unit: float

    def matches(self, other: "FoodKey") -> bool:
        """Return True when both keys identify the same catalog entry."""
        return (
            self.food_id == other.food_id
            and self.origin_name == other.origin_name
            and self.food_name == other.food_name
            and self.unit == other.unit
            and abs(self.calorie_per_unit - other.calorie_per_unit)
            < CALORIE_TOLERANCE
        )


@dataclass(frozen=True)
class AllocationSlot:
    """Ratio and patient configured for one allocation component."""

    code: ComponentCode
    ratio: str | None = None
    patient: str | None = None


def empty_slots() -> tuple[AllocationSlot, ...]:
    """Return the five slots with nothing configured."""
    return tuple(AllocationSlot(code=code) for code in COMPONENT_CODES)


@dataclass(frozen=True)
class FoodRecord:
    """A food catalog entry with its allocation configuration."""

    id: UUID
    food_id: str
    origin_name: str
    food_name: str
    unit: str
    calorie_per_unit: float
    calorie_usage: str | None
    slots: tuple[AllocationSlot, ...]
    loss_ratio: str | None
    destination_name: str | None = None
    insurance_type_name: str | None = None
    apply_date: str | None = None
    active: bool = True

    @property
    def key(self) -> FoodKey:
        return FoodKey(
            food_id=self.food_id,
            origin_name=self.origin_name,
            food_name=self.food_name,
            unit=self.unit,
            calorie_per_unit=self.calorie_per_unit,
        )

    def slot(self, code: ComponentCode) -> AllocationSlot:
        """Return the slot for a component code."""
        for slot in self.slots:
            if slot.code is code:
                return slot
        return AllocationSlot(code=code)
