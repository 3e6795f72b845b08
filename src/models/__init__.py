"""SQLAlchemy models."""

from src.models.account import Account
from src.models.inventory import InventoryItem
from src.models.meal_plan import MealPlan

__all__ = [
    "Account",
    "InventoryItem",
    "MealPlan",
]
