"""Loss analysis endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from food_usage_tracker.api.dependencies import require_token
from food_usage_tracker.api.schemas import PeriodExportRequest
from food_usage_tracker.config import parse_period

if TYPE_CHECKING:
    from food_usage_tracker.containers import AppContainer

router = APIRouter(
    prefix="/analysis", tags=["analysis"], dependencies=[Depends(require_token)]
)


@router.get("/patients")
async def patient_analysis(
    from_month_year: str, to_month_year: str, request: Request
) -> dict[str, object]:
    """Return HH 3.1 losses per patient."""
    container: AppContainer = request.app.state.container
    period = parse_period(from_month_year, to_month_year)
    return {"rows": container.analysis_service.get_patient_analysis(period)}


@router.post("/patients/export")
async def export_patient_analysis(
    payload: PeriodExportRequest, request: Request
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    service = container.analysis_service
    period = parse_period(payload.from_month_year, payload.to_month_year)
    path = service.export_patient_analysis(
        service.get_patient_analysis(period), payload.path
    )
    return {"path": str(path)}


@router.get("/foods")
async def food_analysis(
    from_month_year: str, to_month_year: str, request: Request
) -> dict[str, object]:
    """Return losses per food code."""
    container: AppContainer = request.app.state.container
    period = parse_period(from_month_year, to_month_year)
    return {"rows": container.analysis_service.get_food_analysis(period)}


@router.post("/foods/export")
async def export_food_analysis(
    payload: PeriodExportRequest, request: Request
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    service = container.analysis_service
    period = parse_period(payload.from_month_year, payload.to_month_year)
    path = service.export_food_analysis(
        service.get_food_analysis(period), payload.path
    )
    return {"path": str(path)}
