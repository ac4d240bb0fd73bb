"""Monthly usage endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from food_usage_tracker.api.dependencies import require_token
from food_usage_tracker.api.schemas import (
    CalculateRequest,
    ExportUsageRequest,
    HistoryExportRequest,
    ImportUsageRequest,
    SaveUsageRequest,
)
from food_usage_tracker.config import parse_month_year

if TYPE_CHECKING:
    from food_usage_tracker.containers import AppContainer

router = APIRouter(
    prefix="/usage", tags=["usage"], dependencies=[Depends(require_token)]
)


@router.post("/calculate")
async def calculate_usage(
    payload: CalculateRequest, request: Request
) -> dict[str, object]:
    """Calculate allocations for usage rows of a month."""
    container: AppContainer = request.app.state.container
    month_year = parse_month_year(payload.month_year)
    result = container.usage_service.calculate_batch(
        month_year, [row.to_domain() for row in payload.rows]
    )
    return {"result": result}


@router.post("/import")
async def import_usage(
    payload: ImportUsageRequest, request: Request
) -> dict[str, object]:
    """Calculate allocations for a usage spreadsheet."""
    container: AppContainer = request.app.state.container
    month_year = parse_month_year(payload.month_year)
    result = container.usage_service.calculate_file(month_year, payload.path)
    return {"result": result}


@router.post("/save")
async def save_usage(
    payload: SaveUsageRequest, request: Request
) -> dict[str, object]:
    """Replace the saved usage of a period with calculated rows."""
    container: AppContainer = request.app.state.container
    month_year = parse_month_year(payload.import_month_year)
    saved = container.usage_service.save_usage_records(month_year, payload.rows)
    return {"saved": saved}


@router.post("/export")
async def export_usage(
    payload: ExportUsageRequest, request: Request
) -> dict[str, str]:
    """Export calculated rows to a spreadsheet."""
    container: AppContainer = request.app.state.container
    path = container.usage_service.export_results(payload.rows, payload.path)
    return {"path": str(path)}


@router.get("/history")
async def usage_history(
    import_month_year: str, request: Request
) -> dict[str, object]:
    """Return saved usage of a period, recalculated from the catalog."""
    container: AppContainer = request.app.state.container
    month_year = parse_month_year(import_month_year)
    return {"rows": container.usage_service.get_usage_history(month_year)}


@router.post("/history/export")
async def export_usage_history(
    payload: HistoryExportRequest, request: Request
) -> dict[str, str]:
    """Export the saved usage of a period."""
    container: AppContainer = request.app.state.container
    month_year = parse_month_year(payload.import_month_year)
    rows = container.usage_service.get_usage_history(month_year)
    path = container.usage_service.export_results(rows, payload.path)
    return {"path": str(path)}
