"""Inventory API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_inventory_service
from src.schemas.inventory import InventoryItemResponse
from src.services.inventory_service import InventoryService

router = APIRouter(prefix="/api/v1/accounts/{account_id}/inventory", tags=["inventory"])


@router.get("", response_model=list[InventoryItemResponse])
def list_inventory(
    account_id: int,
    service: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """List inventory, soonest-expiring first and undated items last."""
    return service.list_items(account_id)


@router.post("/refresh", response_model=list[InventoryItemResponse])
async def refresh_inventory(
    account_id: int,
    service: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Replace the local inventory with a fresh snapshot from the source."""
    return await service.refresh(account_id)
