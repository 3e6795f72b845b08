"""Response contracts of the external services this app consumes."""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from src.services.dates import parse_date

# --- Inventory source ---


class SourceInventoryItem(BaseModel):
    """One entry reported by a household's inventory source."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: int
    unit: str = Field(..., max_length=50)
    expiry_date: date | None = None

    @field_validator("expiry_date", mode="before")
    @classmethod
    def parse_expiry(cls, value):
        """Accept plain dates and full ISO timestamps; keep only the calendar date."""
        if isinstance(value, str):
            return parse_date(value) if value.strip() else None
        return value


class InventorySourceResponse(BaseModel):
    """Body returned by the inventory endpoint."""

    status: str
    items: list[SourceInventoryItem]


# --- Meal plan generation ---


class Meal(BaseModel):
    """A single meal in the plan."""

    title: str
    ingredients_summary: str


class DailyMeal(BaseModel):
    """Breakfast, lunch and dinner for one day."""

    date: str  # YYYY-MM-DD
    breakfast: Meal
    lunch: Meal
    dinner: Meal


class WeeklyMealPlan(BaseModel):
    """The plan body stored in ``MealPlan.plan_data``."""

    week_start_date: str  # YYYY-MM-DD
    daily_meals: list[DailyMeal]


class ShoppingGapItem(BaseModel):
    """An ingredient the plan needs that the inventory does not cover."""

    ingredient: str
    quantity_needed: str
    used_for_meals: list[str]


class MealPlanGenerationResponse(BaseModel):
    """Body returned by the meal plan generation service."""

    status: str
    meal_plan: WeeklyMealPlan
    shopping_gaps: list[ShoppingGapItem]
