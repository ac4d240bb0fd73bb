"""Monthly usage calculation, persistence and history."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from food_usage_tracker.adapters.openpyxl_spreadsheet import (
    SpreadsheetReader,
    SpreadsheetWriter,
)
from food_usage_tracker.domain.foods import ComponentCode, FoodRecord
from food_usage_tracker.domain.reports import PeriodRange
from food_usage_tracker.domain.usage import (
    BatchResult,
    StoredUsage,
    UsageCalculationRow,
    UsageInputRow,
    UsageNotFoundItem,
)
from food_usage_tracker.services.allocation import AllocationCalculator
from food_usage_tracker.services.exports import (
    NOT_FOUND_SHEET,
    USAGE_SHEET,
    not_found_records,
    usage_records,
)
from food_usage_tracker.services.matching import FoodMatcher
from food_usage_tracker.services.tabular import (
    cell_number,
    cell_text,
    is_blank_row,
)

_logger = logging.getLogger(__name__)

# Input columns in positional order (A-G) with their accepted header names.
USAGE_COLUMNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("food_id", ("food code", "code", "mã số")),
    ("origin_name", ("origin", "nơi lấy mẫu")),
    ("food_name", ("food", "food name", "thực phẩm")),
    ("unit", ("unit", "đơn vị tính")),
    ("value", ("value", "giá trị")),
    ("month_year", ("date", "month/year", "ngày tháng")),
    ("quantity", ("quantity", "số lượng")),
)


class UsageRepository(Protocol):
    """Persistence interface for saved usage records."""

    def replace_period(
        self, import_month_year: str, rows: list[UsageCalculationRow]
    ) -> int:
        """Atomically replace all usage records of a period; return the count."""

    def list_usage(
        self,
        period: PeriodRange,
        *,
        patient: str | None = None,
        component: ComponentCode | None = None,
        food_id: str | None = None,
    ) -> list[StoredUsage]:
        """Return usage records within the period range, newest first."""


@dataclass
class UsageService:
    """Matches usage rows to the catalog and computes calorie allocation."""

    matcher: FoodMatcher
    calculator: AllocationCalculator
    history_calculator: AllocationCalculator
    repository: UsageRepository
    reader: SpreadsheetReader
    writer: SpreadsheetWriter
    export_dir: Path

    def calculate_batch(
        self, selected_month_year: str, input_rows: list[UsageInputRow]
    ) -> BatchResult:
        """Calculate every input row, collecting rows without a catalog match.

        Store failures abort the whole batch; unmatched rows never do.
        """
        _logger.info(
            "Calculating usage for %s rows for %s",
            len(input_rows),
            selected_month_year,
        )
        result = BatchResult(success=True)
        for input_row in input_rows:
            food = self.matcher.find_food(
                input_row.food_id,
                input_row.origin_name,
                input_row.food_name,
                input_row.unit,
                input_row.value,
            )
            if food is None:
                result.not_found_items.append(
                    UsageNotFoundItem(
                        food_id=input_row.food_id,
                        origin_name=input_row.origin_name,
                        food_name=input_row.food_name,
                        unit=input_row.unit,
                        value=input_row.value,
                    )
                )
                continue
            result.calculated_data.append(
                build_calculation_row(
                    self.calculator, input_row, food, selected_month_year
                )
            )

        if result.not_found_items:
            path = self.export_not_found(result.not_found_items, selected_month_year)
            result.not_found_file_path = str(path)

        _logger.info(
            "Usage calculation complete: %s calculated, %s not found",
            len(result.calculated_data),
            len(result.not_found_items),
        )
        return result

    def calculate_file(self, selected_month_year: str, path: str | Path) -> BatchResult:
        """Parse a usage spreadsheet and calculate it as one batch."""
        return self.calculate_batch(selected_month_year, self.parse_usage_file(path))

    def parse_usage_file(self, path: str | Path) -> list[UsageInputRow]:
        """Read usage input rows from a spreadsheet with a header row."""
        table = self.reader.read_table(path)
        rows = parse_usage_table(table)
        _logger.info("Parsed %s usage rows from %s", len(rows), path)
        return rows

    def export_not_found(
        self, items: list[UsageNotFoundItem], month_year: str
    ) -> Path:
        """Write unmatched rows to a timestamped file in the export directory."""
        timestamp = datetime.now(tz=UTC).strftime("%Y%m%dT%H%M%S%f")
        path = self.export_dir / f"NotFound_{month_year}_{timestamp}.xlsx"
        return self.writer.write_records(
            path, NOT_FOUND_SHEET, not_found_records(items)
        )

    def export_results(
        self, rows: list[UsageCalculationRow], path: str | Path
    ) -> Path:
        """Write calculated rows to a spreadsheet."""
        return self.writer.write_records(path, USAGE_SHEET, usage_records(rows))

    def save_usage_records(
        self, import_month_year: str, rows: list[UsageCalculationRow]
    ) -> int:
        """Replace the saved usage of a period with the given rows."""
        saved_count = self.repository.replace_period(import_month_year, rows)
        _logger.info(
            "Saved %s usage records for import month %s",
            saved_count,
            import_month_year,
        )
        return saved_count

    def get_usage_history(self, import_month_year: str) -> list[UsageCalculationRow]:
        """Return the saved usage of a period, recalculated from the catalog."""
        stored = self.repository.list_usage(
            PeriodRange(import_month_year, import_month_year)
        )
        rows = [calculate_stored(self.history_calculator, usage) for usage in stored]
        _logger.info(
            "Retrieved %s usage history records for %s", len(rows), import_month_year
        )
        return rows


def build_calculation_row(
    calculator: AllocationCalculator,
    input_row: UsageInputRow,
    food: FoodRecord,
    selected_month_year: str,
) -> UsageCalculationRow:
    """Merge an input row, its catalog entry and the computed allocation."""
    result = calculator.calculate(food, input_row.quantity, input_row.value)
    return UsageCalculationRow(
        id=food.id,
        food_id=input_row.food_id,
        origin_name=input_row.origin_name,
        food_name=input_row.food_name,
        unit=input_row.unit,
        value=input_row.value,
        quantity=input_row.quantity,
        month_year=input_row.month_year,
        selected_month_year=selected_month_year,
        total_calories=result.total_calories,
        used_calories=result.used_calories,
        components=result.components,
        loss_ratio=result.loss_ratio,
        remaining_calories=result.remaining_calories,
        destination_name=food.destination_name,
        insurance_type_name=food.insurance_type_name,
        apply_date=food.apply_date,
        active=food.active,
    )


def calculate_stored(
    calculator: AllocationCalculator, usage: StoredUsage
) -> UsageCalculationRow:
    """Recalculate a saved usage record against its current catalog entry."""
    food = usage.food
    input_row = UsageInputRow(
        food_id=food.food_id,
        origin_name=food.origin_name,
        food_name=food.food_name,
        unit=food.unit,
        value=food.calorie_per_unit,
        quantity=usage.quantity,
        month_year=usage.sample_date,
    )
    return build_calculation_row(
        calculator, input_row, food, usage.import_month_year
    )


def parse_usage_table(table: list[list[object]]) -> list[UsageInputRow]:
    """Map a header row plus data rows to usage input rows.

    Columns are located by header name. When no header is recognised the
    positional layout A-G is used.
    """
    if not table:
        return []
    positions = _column_positions(table[0])
    rows = []
    for raw in table[1:]:
        if is_blank_row(raw):
            continue
        cells = {name: _cell(raw, index) for name, index in positions.items()}
        rows.append(
            UsageInputRow(
                food_id=cell_text(cells["food_id"]) or "",
                origin_name=cell_text(cells["origin_name"]) or "",
                food_name=cell_text(cells["food_name"]) or "",
                unit=cell_text(cells["unit"]) or "",
                value=cell_number(cells["value"]) or 0.0,
                quantity=cell_number(cells["quantity"]) or 0.0,
                month_year=cell_text(cells["month_year"]),
            )
        )
    return rows


def _column_positions(header: list[object]) -> dict[str, int | None]:
    labels = [(cell_text(cell) or "").lower() for cell in header]
    found = {
        name: next((i for i, label in enumerate(labels) if label in aliases), None)
        for name, aliases in USAGE_COLUMNS
    }
    if all(index is None for index in found.values()):
        return {name: index for index, (name, _) in enumerate(USAGE_COLUMNS)}
    return found


def _cell(row: list[object], index: int | None) -> object:
    if index is None or index >= len(row):
        return None
    return row[index]
