"""Food catalog import and maintenance."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol
from uuid import UUID

from food_usage_tracker.adapters.openpyxl_spreadsheet import (
    SpreadsheetReader,
    SpreadsheetWriter,
)
from food_usage_tracker.domain.catalog import (
    MUTABLE_FOOD_FIELDS,
    CategoryKind,
    ImportResult,
    ImportRowError,
    slot_columns,
)
from food_usage_tracker.domain.errors import (
    FoodNotFoundError,
    FoodUsageError,
    FoodValidationError,
    SpreadsheetFormatError,
    StoreUnavailableError,
)
from food_usage_tracker.domain.foods import COMPONENT_CODES, AllocationSlot, FoodRecord
from food_usage_tracker.services.error_messages import user_friendly_message
from food_usage_tracker.services.exports import (
    IMPORT_ERRORS_SHEET,
    import_error_records,
)
from food_usage_tracker.services.matching import FoodRepository
from food_usage_tracker.services.tabular import (
    cell_active,
    cell_number,
    cell_text,
    is_blank_row,
)

_logger = logging.getLogger(__name__)

HEADER_ROWS = 2
# Column offsets of the catalog sheet (A-U).
FIRST_SLOT_COLUMN = 6
LOSS_RATIO_COLUMN = 16
DESTINATION_COLUMN = 17
INSURANCE_TYPE_COLUMN = 18
APPLY_DATE_COLUMN = 19
ACTIVE_COLUMN = 20


class CategoryRepository(Protocol):
    """Persistence interface for the name lists foods refer to."""

    def find_or_create(self, category: CategoryKind, name: str) -> UUID:
        """Return the id of a named entry, creating it when missing."""


@dataclass
class CatalogService:
    """Imports and maintains catalog entries."""

    repository: FoodRepository
    categories: CategoryRepository
    reader: SpreadsheetReader
    writer: SpreadsheetWriter
    export_dir: Path

    def list_foods(self) -> list[FoodRecord]:
        return self.repository.list_foods()

    def import_foods(self, path: str | Path, export_errors: bool = False) -> ImportResult:
        """Create a catalog entry for every data row of a catalog spreadsheet.

        Rows that fail validation or violate the store's uniqueness rule are
        collected as errors; the remaining rows are still imported.
        """
        result = ImportResult()
        try:
            table = self.reader.read_table(path)
        except (SpreadsheetFormatError, OSError) as exc:
            _logger.warning("Cannot read catalog file %s: %s", path, exc)
            result.errors.append(ImportRowError(row=0, error=user_friendly_message(exc)))
            return result

        if len(table) <= HEADER_ROWS:
            result.errors.append(
                ImportRowError(
                    row=0,
                    error=(
                        "The spreadsheet needs at least 3 rows "
                        "(2 header rows and 1 data row)."
                    ),
                )
            )
            return result

        for index, row in enumerate(table[HEADER_ROWS:], start=HEADER_ROWS + 1):
            if is_blank_row(row):
                continue
            try:
                self.repository.create_food(self._food_payload(row))
            except StoreUnavailableError:
                raise
            except FoodUsageError as exc:
                result.errors.append(_row_error(index, row, exc))
                continue
            result.imported += 1

        if result.errors and export_errors:
            result.error_file_path = str(self.export_import_errors(result.errors))
        _logger.info(
            "Catalog import from %s: %s imported, %s errors",
            path,
            result.imported,
            len(result.errors),
        )
        return result

    def export_import_errors(self, errors: list[ImportRowError]) -> Path:
        """Write import errors to a timestamped file in the export directory."""
        timestamp = datetime.now(tz=UTC).strftime("%Y%m%dT%H%M%S%f")
        path = self.export_dir / f"ImportErrors_{timestamp}.xlsx"
        return self.writer.write_records(
            path, IMPORT_ERRORS_SHEET, import_error_records(errors)
        )

    def set_active(self, food_record_id: UUID, active: bool) -> FoodRecord:
        """Activate or retire a catalog entry.

        Activating an entry whose key is already active raises
        ``DuplicateFoodError`` from the store.
        """
        self._require_food(food_record_id)
        food = self.repository.set_active(food_record_id, active)
        _logger.info("Food %s set active=%s", food_record_id, active)
        return food

    def update_food(
        self, food_record_id: UUID, changes: dict[str, object]
    ) -> FoodRecord:
        """Update the mutable fields of a catalog entry."""
        rejected = sorted(set(changes) - MUTABLE_FOOD_FIELDS)
        if rejected:
            raise ValueError(f"Fields cannot be changed: {', '.join(rejected)}")
        self._require_food(food_record_id)
        return self.repository.update_food(food_record_id, changes)

    def _require_food(self, food_record_id: UUID) -> FoodRecord:
        food = self.repository.get_food(food_record_id)
        if food is None:
            raise FoodNotFoundError(f"Food {food_record_id} does not exist")
        return food

    def _food_payload(self, row: list[object]) -> dict[str, object]:
        food_id = cell_text(_cell(row, 0))
        origin_name = cell_text(_cell(row, 1))
        food_name = cell_text(_cell(row, 2))
        unit = cell_text(_cell(row, 3))
        calorie_per_unit = cell_number(_cell(row, 4))

        if not food_id:
            raise FoodValidationError(
                'Column "Food code" (column A) must not be empty. Enter the food code.'
            )
        if not food_name:
            raise FoodValidationError(
                'Column "Food" (column C) must not be empty. Enter the food name.'
            )
        if not unit:
            raise FoodValidationError(
                'Column "Unit" (column D) must not be empty. Enter a unit (kg, g, ml, ...).'
            )
        if calorie_per_unit is None:
            raise FoodValidationError(
                'Column "Value" (column E) must be a valid number of calories per unit.'
            )

        destination_name = cell_text(_cell(row, DESTINATION_COLUMN))
        insurance_type_name = cell_text(_cell(row, INSURANCE_TYPE_COLUMN))
        slots = tuple(
            AllocationSlot(
                code=code,
                ratio=cell_text(_cell(row, FIRST_SLOT_COLUMN + 2 * offset)),
                patient=cell_text(_cell(row, FIRST_SLOT_COLUMN + 2 * offset + 1)),
            )
            for offset, code in enumerate(COMPONENT_CODES)
        )
        return {
            "food_id": food_id,
            "origin_id": self._category_id(CategoryKind.ORIGIN, origin_name),
            "food_name_id": str(
                self.categories.find_or_create(CategoryKind.FOOD_NAME, food_name)
            ),
            "unit_id": str(self.categories.find_or_create(CategoryKind.UNIT, unit)),
            "calorie_per_unit": calorie_per_unit,
            "calorie_usage": cell_text(_cell(row, 5)),
            **slot_columns(slots),
            "loss_ratio": cell_text(_cell(row, LOSS_RATIO_COLUMN)),
            "destination_id": self._category_id(
                CategoryKind.DESTINATION, destination_name
            ),
            "insurance_type_id": self._category_id(
                CategoryKind.INSURANCE_TYPE, insurance_type_name
            ),
            "apply_date": cell_text(_cell(row, APPLY_DATE_COLUMN)),
            "active": cell_active(_cell(row, ACTIVE_COLUMN)),
        }

    def _category_id(self, category: CategoryKind, name: str | None) -> str | None:
        if not name:
            return None
        return str(self.categories.find_or_create(category, name))


def _row_error(index: int, row: list[object], exc: Exception) -> ImportRowError:
    return ImportRowError(
        row=index,
        error=user_friendly_message(exc),
        food_id=cell_text(_cell(row, 0)) or "",
        origin_name=cell_text(_cell(row, 1)) or "",
        food_name=cell_text(_cell(row, 2)) or "",
        unit=cell_text(_cell(row, 3)) or "",
        calorie_per_unit=cell_text(_cell(row, 4)) or "",
    )


def _cell(row: list[object], index: int) -> object:
    return row[index] if index < len(row) else None
