"""Patient and food reports over saved usage."""

from dataclasses import dataclass
from pathlib import Path

from food_usage_tracker.adapters.openpyxl_spreadsheet import SpreadsheetWriter
from food_usage_tracker.domain.foods import ComponentCode
from food_usage_tracker.domain.reports import (
    FoodSummaryRow,
    PatientSummaryRow,
    PeriodRange,
)
from food_usage_tracker.domain.usage import UsageCalculationRow
from food_usage_tracker.services.allocation import AllocationCalculator
from food_usage_tracker.services.exports import (
    FOOD_DETAIL_SHEET,
    FOOD_SUMMARY_SHEET,
    PATIENT_DETAIL_SHEET,
    PATIENT_SUMMARY_SHEET,
    detail_records,
    food_summary_records,
    patient_summary_records,
)
from food_usage_tracker.services.usage import UsageRepository, calculate_stored

MISSING_FOOD_ID = "(no code)"
MISSING_FOOD_NAME = "-"
NO_COMPONENT_GROUP = "No HH"


@dataclass
class ReportService:
    """Service for patient and food usage reports."""

    repository: UsageRepository
    calculator: AllocationCalculator
    writer: SpreadsheetWriter

    def load_rows(
        self,
        period: PeriodRange,
        *,
        patient: str | None = None,
        component: ComponentCode | None = None,
        food_id: str | None = None,
    ) -> list[UsageCalculationRow]:
        """Return saved usage in the period, recalculated from the catalog."""
        stored = self.repository.list_usage(
            period, patient=patient, component=component, food_id=food_id
        )
        return [calculate_stored(self.calculator, usage) for usage in stored]

    def get_patient_summary(self, period: PeriodRange) -> list[PatientSummaryRow]:
        """Return per-patient totals for each allocation component."""
        return summarize_by_patient(self.load_rows(period))

    def get_patient_detail(
        self, period: PeriodRange, patient: str, component: ComponentCode
    ) -> list[UsageCalculationRow]:
        """Return usage rows attributed to a patient within one component."""
        return self.load_rows(period, patient=patient, component=component)

    def get_food_summary(self, period: PeriodRange) -> list[FoodSummaryRow]:
        """Return per-food totals."""
        return summarize_by_food(self.load_rows(period))

    def get_food_detail(
        self, period: PeriodRange, food_id: str
    ) -> list[UsageCalculationRow]:
        """Return usage rows of one food code."""
        return self.load_rows(period, food_id=food_id)

    def export_patient_summary(
        self, rows: list[PatientSummaryRow], path: str | Path
    ) -> Path:
        return self.writer.write_records(
            path, PATIENT_SUMMARY_SHEET, patient_summary_records(rows)
        )

    def export_patient_detail(
        self, rows: list[UsageCalculationRow], path: str | Path
    ) -> Path:
        return self.writer.write_records(
            path, PATIENT_DETAIL_SHEET, detail_records(rows)
        )

    def export_food_summary(
        self, rows: list[FoodSummaryRow], path: str | Path
    ) -> Path:
        return self.writer.write_records(
            path, FOOD_SUMMARY_SHEET, food_summary_records(rows)
        )

    def export_food_detail(
        self, rows: list[UsageCalculationRow], path: str | Path
    ) -> Path:
        return self.writer.write_records(path, FOOD_DETAIL_SHEET, detail_records(rows))


def summarize_by_patient(rows: list[UsageCalculationRow]) -> list[PatientSummaryRow]:
    """Group rows by (patient, component).

    A row contributes once to every component that names a patient, and its
    whole total is attributed to each of those groups.
    """
    groups: dict[tuple[str, str], PatientSummaryRow] = {}
    for row in rows:
        for allocation in row.components:
            if not allocation.patient:
                continue
            key = (allocation.patient, allocation.label)
            entry = groups.get(key)
            if entry is None:
                entry = PatientSummaryRow(
                    patient=allocation.patient, hh_group=allocation.label
                )
                groups[key] = entry
            entry.total_calories += row.total_calories
            entry.total_used_calories += row.used_calories
            entry.total_loss += allocation.calories or 0
    return list(groups.values())


def summarize_by_food(rows: list[UsageCalculationRow]) -> list[FoodSummaryRow]:
    """Group rows by food code, summing quantity and total calories."""
    groups: dict[str, FoodSummaryRow] = {}
    labels: dict[str, list[str]] = {}
    for row in rows:
        food_id = row.food_id or MISSING_FOOD_ID
        entry = groups.get(food_id)
        if entry is None:
            entry = FoodSummaryRow(
                food_id=food_id, food_name=row.food_name or MISSING_FOOD_NAME
            )
            groups[food_id] = entry
            labels[food_id] = []
        entry.total_quantity += row.quantity
        entry.total_calories += row.total_calories
        for allocation in row.components:
            if (allocation.ratio or 0) > 0 and allocation.label not in labels[food_id]:
                labels[food_id].append(allocation.label)
    for food_id, entry in groups.items():
        ordered = sorted(labels[food_id], key=_label_order)
        entry.hh_group = ", ".join(ordered) if ordered else NO_COMPONENT_GROUP
    return list(groups.values())


def _label_order(label: str) -> int:
    return [code.label for code in ComponentCode].index(label)
