"""Meal plan schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class MealPlanGenerate(BaseModel):
    """Generate a meal plan, optionally for a specific week."""

    week_start_date: date | None = None


class MealPlanResponse(BaseModel):
    """Meal plan response.

    ``plan_data`` and ``shopping_gaps`` are JSON strings; clients parse them.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    account_id: int
    week_start_date: date
    plan_data: str
    shopping_gaps: str
    created_at: datetime
    updated_at: datetime


class DeliveryResult(BaseModel):
    """Outcome of posting a meal plan to a messaging channel."""

    success: bool
    message: str
    channel: str | None = Field(None)
