"""Meal plan API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import get_meal_plan_service, get_notification_service
from src.schemas.meal_plan import DeliveryResult, MealPlanGenerate, MealPlanResponse
from src.services.meal_plan_service import DEFAULT_RECENT_LIMIT, MealPlanService
from src.services.notification_service import NotificationService

router = APIRouter(prefix="/api/v1", tags=["meal-plans"])


@router.post(
    "/accounts/{account_id}/meal-plans",
    response_model=MealPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_meal_plan(
    account_id: int,
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
    data: MealPlanGenerate | None = None,
):
    """Generate a plan for the given week (current week when omitted)."""
    week_start_date = data.week_start_date if data else None
    return await service.generate(account_id, week_start_date)


@router.get("/accounts/{account_id}/meal-plans", response_model=list[MealPlanResponse])
def list_recent_meal_plans(
    account_id: int,
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = DEFAULT_RECENT_LIMIT,
):
    """List recent plans, newest week first."""
    return service.list_recent(account_id, limit)


@router.get("/accounts/{account_id}/meal-plans/week", response_model=MealPlanResponse)
def get_meal_plan(
    account_id: int,
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
    week_start_date: date | None = None,
):
    """Get the plan for a week; defaults to the current week's Monday."""
    meal_plan = service.get_for_week(account_id, week_start_date)
    if not meal_plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal plan not found")
    return meal_plan


@router.post("/meal-plans/{meal_plan_id}/send-to-slack", response_model=DeliveryResult)
async def send_meal_plan_to_slack(
    meal_plan_id: int,
    service: Annotated[NotificationService, Depends(get_notification_service)],
):
    """Post a stored plan to the household's Slack channel."""
    return await service.send_meal_plan(meal_plan_id)
