"""Loss analysis by patient and by food."""

from dataclasses import dataclass
from pathlib import Path

from food_usage_tracker.adapters.openpyxl_spreadsheet import SpreadsheetWriter
from food_usage_tracker.domain.foods import ComponentCode
from food_usage_tracker.domain.reports import (
    FoodAnalysisRow,
    PatientAnalysisRow,
    PeriodRange,
)
from food_usage_tracker.domain.usage import UsageCalculationRow
from food_usage_tracker.services.exports import (
    FOOD_ANALYSIS_SHEET,
    PATIENT_ANALYSIS_SHEET,
    food_analysis_records,
    patient_analysis_records,
)
from food_usage_tracker.services.reports import (
    MISSING_FOOD_ID,
    MISSING_FOOD_NAME,
    ReportService,
)


@dataclass
class AnalysisService:
    """Service for HH 3.1 and total loss analyses."""

    report_service: ReportService
    writer: SpreadsheetWriter

    def get_patient_analysis(self, period: PeriodRange) -> list[PatientAnalysisRow]:
        return analyze_by_patient(self.report_service.load_rows(period))

    def get_food_analysis(self, period: PeriodRange) -> list[FoodAnalysisRow]:
        return analyze_by_food(self.report_service.load_rows(period))

    def export_patient_analysis(
        self, rows: list[PatientAnalysisRow], path: str | Path
    ) -> Path:
        return self.writer.write_records(
            path, PATIENT_ANALYSIS_SHEET, patient_analysis_records(rows)
        )

    def export_food_analysis(
        self, rows: list[FoodAnalysisRow], path: str | Path
    ) -> Path:
        return self.writer.write_records(
            path, FOOD_ANALYSIS_SHEET, food_analysis_records(rows)
        )


def analyze_by_patient(rows: list[UsageCalculationRow]) -> list[PatientAnalysisRow]:
    """Group HH 3.1 allocations by patient.

    Only rows with a HH 3.1 patient and positive HH 3.1 calories count.
    """
    groups: dict[str, PatientAnalysisRow] = {}
    for row in rows:
        allocation = row.component(ComponentCode.HH_3_1)
        calories = allocation.calories or 0
        if not allocation.patient or calories <= 0:
            continue
        entry = groups.setdefault(
            allocation.patient, PatientAnalysisRow(patient=allocation.patient)
        )
        entry.total_calories += row.total_calories
        entry.total_loss += calories
        entry.remaining_calories += row.remaining_calories
    return list(groups.values())


def analyze_by_food(rows: list[UsageCalculationRow]) -> list[FoodAnalysisRow]:
    """Group rows by food code, summing losses of all components."""
    groups: dict[str, FoodAnalysisRow] = {}
    for row in rows:
        food_id = row.food_id or MISSING_FOOD_ID
        entry = groups.get(food_id)
        if entry is None:
            entry = FoodAnalysisRow(
                food_id=food_id, food_name=row.food_name or MISSING_FOOD_NAME
            )
            groups[food_id] = entry
        entry.quantity += row.quantity
        entry.total_loss += sum(
            allocation.calories or 0 for allocation in row.components
        )
        entry.hh31_loss += row.component(ComponentCode.HH_3_1).calories or 0
        entry.remaining_calories += row.remaining_calories
    return list(groups.values())
