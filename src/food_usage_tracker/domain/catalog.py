"""Domain models for catalog maintenance."""

from dataclasses import dataclass, field
from enum import Enum

from food_usage_tracker.domain.foods import COMPONENT_CODES, AllocationSlot


class CategoryKind(str, Enum):
    """Name lists a food row refers to, by table name."""

    ORIGIN = "origins"
    FOOD_NAME = "food_names"
    UNIT = "units"
    DESTINATION = "destinations"
    INSURANCE_TYPE = "insurance_types"


def slot_columns(slots: tuple[AllocationSlot, ...]) -> dict[str, str | None]:
    """Flatten allocation slots into ``hh_x_y_ratio``/``hh_x_y_patient`` columns."""
    columns: dict[str, str | None] = {}
    for slot in slots:
        prefix = slot.code.value.lower()
        columns[f"{prefix}_ratio"] = slot.ratio
        columns[f"{prefix}_patient"] = slot.patient
    return columns


SLOT_COLUMNS: frozenset[str] = frozenset(
    f"{code.value.lower()}_{suffix}"
    for code in COMPONENT_CODES
    for suffix in ("ratio", "patient")
)
MUTABLE_FOOD_FIELDS: frozenset[str] = SLOT_COLUMNS | {
    "calorie_usage",
    "loss_ratio",
    "apply_date",
    "active",
}


@dataclass(frozen=True)
class ImportRowError:
    """A catalog spreadsheet row that could not be imported."""

    row: int
    error: str
    food_id: str = ""
    origin_name: str = ""
    food_name: str = ""
    unit: str = ""
    calorie_per_unit: str = ""


@dataclass
class ImportResult:
    """Outcome of a catalog spreadsheet import."""

    imported: int = 0
    errors: list[ImportRowError] = field(default_factory=list)
    error_file_path: str | None = None

    @property
    def success(self) -> bool:
        return not self.errors
