"""Tests for patient and food reports."""

from food_usage_tracker.domain.foods import ComponentCode
from food_usage_tracker.domain.reports import PeriodRange
from food_usage_tracker.services.exports import FOOD_SUMMARY_SHEET
from food_usage_tracker.services.reports import (
    ReportService,
    summarize_by_food,
    summarize_by_patient,
)
from tests.conftest import FakeSpreadsheet, InMemoryUsageRepository, make_food

JUNE = PeriodRange("2025-06", "2025-06")


def test_patient_summary_groups_by_patient_and_component(
    report_service: ReportService, usage_repository: InMemoryUsageRepository
) -> None:
    food = make_food(
        calorie_per_unit=100.0,
        calorie_usage="0.5",
        slots={
            ComponentCode.HH_1_1: ("10%", "Anna"),
            ComponentCode.HH_3_1: ("0.2", "Anna"),
        },
    )
    usage_repository.add(food, quantity=3.0, import_month_year="2025-06")

    rows = report_service.get_patient_summary(JUNE)

    summary = {(row.patient, row.hh_group): row for row in rows}
    anna = summary[("Anna", "HH 1.1")]
    assert anna.total_calories == 300
    assert anna.total_loss == 30
    assert anna.total_used_calories == 150
    assert summary[("Anna", "HH 3.1")].total_loss == 60
    assert len(rows) == 2


def test_patient_summary_accumulates_across_rows(
    report_service: ReportService, usage_repository: InMemoryUsageRepository
) -> None:
    rice = make_food(calorie_per_unit=100.0, slots={ComponentCode.HH_2_1: ("5", "Ben")})
    soup = make_food(
        food_id="F002",
        food_name="Soup",
        calorie_per_unit=50.0,
        slots={ComponentCode.HH_2_1: ("10%", "Ben")},
    )
    usage_repository.add(rice, quantity=2.0, import_month_year="2025-06")
    usage_repository.add(soup, quantity=4.0, import_month_year="2025-06")

    rows = summarize_by_patient(report_service.load_rows(JUNE))

    assert len(rows) == 1
    assert rows[0].patient == "Ben"
    assert rows[0].total_calories == 400
    assert rows[0].total_loss == 10 + 20


def test_food_summary_collects_component_groups(
    report_service: ReportService, usage_repository: InMemoryUsageRepository
) -> None:
    rice_a = make_food(slots={ComponentCode.HH_3_1: ("0.1", None)})
    rice_b = make_food(slots={ComponentCode.HH_1_1: ("5%", None)})
    plain = make_food(food_id="F002", food_name="Water", calorie_per_unit=0.0)
    unnamed = make_food(food_id="", food_name="")
    usage_repository.add(rice_a, quantity=1.0, import_month_year="2025-06")
    usage_repository.add(rice_b, quantity=2.0, import_month_year="2025-06")
    usage_repository.add(plain, quantity=5.0, import_month_year="2025-06")
    usage_repository.add(unnamed, quantity=1.0, import_month_year="2025-06")

    rows = {
        row.food_id: row for row in summarize_by_food(report_service.load_rows(JUNE))
    }

    assert rows["F001"].total_quantity == 3.0
    assert rows["F001"].total_calories == 3000.0
    assert rows["F001"].hh_group == "HH 1.1, HH 3.1"
    assert rows["F002"].hh_group == "No HH"
    assert rows["(no code)"].food_name == "-"


def test_period_range_is_inclusive(
    report_service: ReportService, usage_repository: InMemoryUsageRepository
) -> None:
    food = make_food()
    for month in ("2025-04", "2025-05", "2025-06", "2025-07"):
        usage_repository.add(food, quantity=1.0, import_month_year=month)

    rows = report_service.get_food_summary(PeriodRange("2025-05", "2025-06"))

    assert rows[0].total_quantity == 2.0


def test_patient_detail_filters_component(
    report_service: ReportService, usage_repository: InMemoryUsageRepository
) -> None:
    anna_hh11 = make_food(slots={ComponentCode.HH_1_1: ("10%", "Anna")})
    anna_hh31 = make_food(food_id="F002", slots={ComponentCode.HH_3_1: ("10%", "Anna")})
    usage_repository.add(anna_hh11, quantity=1.0, import_month_year="2025-06")
    usage_repository.add(anna_hh31, quantity=1.0, import_month_year="2025-06")

    rows = report_service.get_patient_detail(JUNE, "Anna", ComponentCode.HH_3_1)

    assert [row.food_id for row in rows] == ["F002"]


def test_food_detail_and_exports(
    report_service: ReportService,
    usage_repository: InMemoryUsageRepository,
    spreadsheet: FakeSpreadsheet,
) -> None:
    rice = make_food(slots={ComponentCode.HH_2_2: ("0.3", "Chi")})
    usage_repository.add(rice, quantity=1.0, import_month_year="2025-06")
    usage_repository.add(make_food(food_id="F002"), quantity=1.0, import_month_year="2025-06")

    detail = report_service.get_food_detail(JUNE, "F001")
    report_service.export_food_detail(detail, "detail.xlsx")
    report_service.export_food_summary(report_service.get_food_summary(JUNE), "sum.xlsx")

    assert len(detail) == 1
    _, _, detail_records = spreadsheet.written[0]
    assert detail_records[0]["HH 2.2 - Calories"] == 300
    assert "HH 1.1 - Ratio" not in detail_records[0]
    _, sheet_name, summary_records = spreadsheet.written[1]
    assert sheet_name == FOOD_SUMMARY_SHEET
    assert [record["Food code"] for record in summary_records] == ["F002", "F001"]
