"""Patient and food report endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from food_usage_tracker.api.dependencies import require_token
from food_usage_tracker.api.schemas import (
    FoodDetailExportRequest,
    PatientDetailExportRequest,
    PeriodExportRequest,
)
from food_usage_tracker.config import parse_period
from food_usage_tracker.domain.foods import ComponentCode

if TYPE_CHECKING:
    from food_usage_tracker.containers import AppContainer

router = APIRouter(
    prefix="/reports", tags=["reports"], dependencies=[Depends(require_token)]
)


@router.get("/patients")
async def patient_summary(
    from_month_year: str, to_month_year: str, request: Request
) -> dict[str, object]:
    """Return totals per patient and allocation component."""
    container: AppContainer = request.app.state.container
    period = parse_period(from_month_year, to_month_year)
    return {"rows": container.report_service.get_patient_summary(period)}


@router.post("/patients/export")
async def export_patient_summary(
    payload: PeriodExportRequest, request: Request
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    service = container.report_service
    period = parse_period(payload.from_month_year, payload.to_month_year)
    path = service.export_patient_summary(
        service.get_patient_summary(period), payload.path
    )
    return {"path": str(path)}


@router.get("/patients/detail")
async def patient_detail(
    from_month_year: str,
    to_month_year: str,
    patient: str,
    component: ComponentCode,
    request: Request,
) -> dict[str, object]:
    """Return usage rows attributed to a patient within one component."""
    container: AppContainer = request.app.state.container
    period = parse_period(from_month_year, to_month_year)
    rows = container.report_service.get_patient_detail(period, patient, component)
    return {"rows": rows}


@router.post("/patients/detail/export")
async def export_patient_detail(
    payload: PatientDetailExportRequest, request: Request
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    service = container.report_service
    period = parse_period(payload.from_month_year, payload.to_month_year)
    rows = service.get_patient_detail(period, payload.patient, payload.component)
    path = service.export_patient_detail(rows, payload.path)
    return {"path": str(path)}


@router.get("/foods")
async def food_summary(
    from_month_year: str, to_month_year: str, request: Request
) -> dict[str, object]:
    """Return totals per food code."""
    container: AppContainer = request.app.state.container
    period = parse_period(from_month_year, to_month_year)
    return {"rows": container.report_service.get_food_summary(period)}


@router.post("/foods/export")
async def export_food_summary(
    payload: PeriodExportRequest, request: Request
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    service = container.report_service
    period = parse_period(payload.from_month_year, payload.to_month_year)
    path = service.export_food_summary(service.get_food_summary(period), payload.path)
    return {"path": str(path)}


@router.get("/foods/detail")
async def food_detail(
    from_month_year: str, to_month_year: str, food_id: str, request: Request
) -> dict[str, object]:
    """Return usage rows of one food code."""
    container: AppContainer = request.app.state.container
    period = parse_period(from_month_year, to_month_year)
    return {"rows": container.report_service.get_food_detail(period, food_id)}


@router.post("/foods/detail/export")
async def export_food_detail(
    payload: FoodDetailExportRequest, request: Request
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    service = container.report_service
    period = parse_period(payload.from_month_year, payload.to_month_year)
    rows = service.get_food_detail(period, payload.food_id)
    path = service.export_food_detail(rows, payload.path)
    return {"path": str(path)}
