"""Flat spreadsheet records for calculated rows and reports."""

from food_usage_tracker.domain.catalog import ImportRowError
from food_usage_tracker.domain.reports import (
    FoodAnalysisRow,
    FoodSummaryRow,
    PatientAnalysisRow,
    PatientSummaryRow,
)
from food_usage_tracker.domain.usage import UsageCalculationRow, UsageNotFoundItem

NOT_FOUND_SHEET = "Not found"
USAGE_SHEET = "Calculation results"
PATIENT_SUMMARY_SHEET = "Patient summary"
PATIENT_DETAIL_SHEET = "Patient detail"
FOOD_SUMMARY_SHEET = "Food summary"
FOOD_DETAIL_SHEET = "Food detail"
PATIENT_ANALYSIS_SHEET = "Patient analysis"
FOOD_ANALYSIS_SHEET = "Food analysis"
IMPORT_ERRORS_SHEET = "Import errors"


def not_found_records(items: list[UsageNotFoundItem]) -> list[dict[str, object]]:
    return [
        {
            "Food code": item.food_id,
            "Origin": item.origin_name,
            "Food": item.food_name,
            "Unit": item.unit,
            "Value": item.value,
            "Reason": item.reason,
        }
        for item in items
    ]


def usage_records(rows: list[UsageCalculationRow]) -> list[dict[str, object]]:
    """Full calculation rows, one column group per allocation component."""
    records = []
    for index, row in enumerate(rows, start=1):
        record: dict[str, object] = {
            "No.": index,
            "Food code": row.food_id,
            "Origin": row.origin_name,
            "Food": row.food_name,
            "Unit": row.unit,
            "Value": row.value,
            "Quantity": row.quantity,
            "Date": row.month_year or "",
            "Total calories": row.total_calories,
            "Used calories": row.used_calories,
        }
        for allocation in row.components:
            record[f"{allocation.label} - Ratio"] = _blank(allocation.ratio)
            record[f"{allocation.label} - Calories"] = _blank(allocation.calories)
            record[f"{allocation.label} - Patient"] = allocation.patient or ""
        record["Loss ratio"] = _blank(row.loss_ratio)
        record["Remaining calories"] = row.remaining_calories
        record["Destination"] = row.destination_name or ""
        record["Insurance type"] = row.insurance_type_name or ""
        records.append(record)
    return records


def detail_records(rows: list[UsageCalculationRow]) -> list[dict[str, object]]:
    """Report detail rows; components without a ratio are left out."""
    records = []
    for index, row in enumerate(rows, start=1):
        record: dict[str, object] = {
            "No.": index,
            "Food code": row.food_id,
            "Origin": row.origin_name,
            "Destination": row.destination_name or "",
            "Insurance type": row.insurance_type_name or "",
            "Food": row.food_name,
            "Unit": row.unit,
            "Value": row.value,
            "Quantity": row.quantity,
            "Date": row.month_year or "",
            "Total calories": row.total_calories,
        }
        for allocation in row.components:
            if allocation.ratio is None:
                continue
            record[f"{allocation.label} - Ratio"] = allocation.ratio
            record[f"{allocation.label} - Calories"] = allocation.calories
            record[f"{allocation.label} - Patient"] = allocation.patient or ""
        records.append(record)
    return records


def patient_summary_records(
    rows: list[PatientSummaryRow],
) -> list[dict[str, object]]:
    return [
        {
            "No.": index,
            "Patient": row.patient,
            "Total calories": row.total_calories,
            "Used calories": row.total_used_calories,
            "Loss calories": row.total_loss,
            "Loss group": row.hh_group,
        }
        for index, row in enumerate(rows, start=1)
    ]


def food_summary_records(rows: list[FoodSummaryRow]) -> list[dict[str, object]]:
    return [
        {
            "No.": index,
            "Food code": row.food_id,
            "Food": row.food_name,
            "Total quantity": row.total_quantity,
            "Total calories": row.total_calories,
            "Loss group": row.hh_group,
        }
        for index, row in enumerate(rows, start=1)
    ]


def patient_analysis_records(
    rows: list[PatientAnalysisRow],
) -> list[dict[str, object]]:
    return [
        {
            "No.": index,
            "Patient": row.patient,
            "Total calories": row.total_calories,
            "Loss calories": row.total_loss,
            "Remaining calories": row.remaining_calories,
        }
        for index, row in enumerate(rows, start=1)
    ]


def food_analysis_records(rows: list[FoodAnalysisRow]) -> list[dict[str, object]]:
    return [
        {
            "No.": index,
            "Food code": row.food_id,
            "Food": row.food_name,
            "Quantity": row.quantity,
            "Total loss": row.total_loss,
            "HH 3.1 loss": row.hh31_loss,
            "Remaining calories": row.remaining_calories,
        }
        for index, row in enumerate(rows, start=1)
    ]


def import_error_records(errors: list[ImportRowError]) -> list[dict[str, object]]:
    return [
        {
            "Row": error.row,
            "Error": error.error,
            "Food code": error.food_id,
            "Origin": error.origin_name,
            "Food": error.food_name,
            "Unit": error.unit,
            "Calories per unit": error.calorie_per_unit,
        }
        for error in errors
    ]


def _blank(value: object) -> object:
    return "" if value is None else value
