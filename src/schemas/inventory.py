"""Inventory schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class InventoryItemResponse(BaseModel):
    """Inventory item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    account_id: int
    name: str
    quantity: int
    unit: str
    expiry_date: date | None
    is_expiring_soon: bool
    created_at: datetime
    updated_at: datetime
