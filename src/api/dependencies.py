"""FastAPI dependencies for services and upstream clients."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from src.database import get_db
from src.services.account_service import AccountService
from src.services.inventory_service import InventoryService
from src.services.meal_plan_service import MealPlanService
from src.services.notification_service import NotificationService
from src.services.upstream import (
    InventorySourceClient,
    LocalMealPlanner,
    MealPlanGeneratorClient,
    SlackClient,
    get_meal_planner,
)


def get_inventory_source() -> InventorySourceClient:
    """Get inventory source client instance."""
    return InventorySourceClient()


def get_planner() -> MealPlanGeneratorClient | LocalMealPlanner:
    """Get the configured meal planner."""
    return get_meal_planner()


def get_slack_client() -> SlackClient:
    """Get Slack client instance."""
    return SlackClient()


def get_account_service(
    db: Annotated[Session, Depends(get_db)],
) -> AccountService:
    """Get account service with dependencies."""
    return AccountService(db)


def get_inventory_service(
    db: Annotated[Session, Depends(get_db)],
    source: Annotated[InventorySourceClient, Depends(get_inventory_source)],
) -> InventoryService:
    """Get inventory service with dependencies."""
    return InventoryService(db, source)


def get_notification_service(
    db: Annotated[Session, Depends(get_db)],
    slack: Annotated[SlackClient, Depends(get_slack_client)],
) -> NotificationService:
    """Get notification service with dependencies."""
    return NotificationService(db, slack)


def get_meal_plan_service(
    db: Annotated[Session, Depends(get_db)],
    planner: Annotated[MealPlanGeneratorClient | LocalMealPlanner, Depends(get_planner)],
    notifier: Annotated[NotificationService, Depends(get_notification_service)],
) -> MealPlanService:
    """Get meal plan service with dependencies."""
    return MealPlanService(db, planner, notifier)
