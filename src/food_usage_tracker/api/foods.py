"""Food catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from food_usage_tracker.api.dependencies import require_token
from food_usage_tracker.api.schemas import (
    FoodStatusRequest,
    FoodUpdateRequest,
    ImportFoodsRequest,
)

if TYPE_CHECKING:
    from food_usage_tracker.containers import AppContainer

router = APIRouter(
    prefix="/foods", tags=["foods"], dependencies=[Depends(require_token)]
)


@router.get("")
async def list_foods(request: Request) -> dict[str, object]:
    """Return every catalog entry, active or not."""
    container: AppContainer = request.app.state.container
    return {"foods": container.catalog_service.list_foods()}


@router.post("/import")
async def import_foods(
    payload: ImportFoodsRequest, request: Request
) -> dict[str, object]:
    """Import catalog entries from a spreadsheet."""
    container: AppContainer = request.app.state.container
    result = container.catalog_service.import_foods(
        payload.path, export_errors=payload.export_errors
    )
    return {
        "success": result.success,
        "imported": result.imported,
        "errors": result.errors,
        "error_file_path": result.error_file_path,
    }


@router.patch("/{food_record_id}/status")
async def set_food_status(
    food_record_id: UUID, payload: FoodStatusRequest, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    food = container.catalog_service.set_active(food_record_id, payload.active)
    return {"food": food}


@router.patch("/{food_record_id}")
async def update_food(
    food_record_id: UUID, payload: FoodUpdateRequest, request: Request
) -> dict[str, object]:
    """Update the mutable fields of a catalog entry."""
    container: AppContainer = request.app.state.container
    changes = payload.model_dump(exclude_unset=True)
    food = container.catalog_service.update_food(food_record_id, changes)
    return {"food": food}
