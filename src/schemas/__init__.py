"""Pydantic schemas for API requests and responses."""

from src.schemas.account import AccountConnect, AccountResponse, AccountSettingsUpdate
from src.schemas.health import HealthResponse
from src.schemas.inventory import InventoryItemResponse
from src.schemas.meal_plan import DeliveryResult, MealPlanGenerate, MealPlanResponse

__all__ = [
    "AccountConnect",
    "AccountSettingsUpdate",
    "AccountResponse",
    "InventoryItemResponse",
    "MealPlanGenerate",
    "MealPlanResponse",
    "DeliveryResult",
    "HealthResponse",
]
