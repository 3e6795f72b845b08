"""Meal plan service for generating and looking up weekly plans."""

import json
import logging
from datetime import date

from sqlalchemy.orm import Session

from src.models.meal_plan import MealPlan
from src.schemas.upstream import MealPlanGenerationResponse
from src.services.account_service import AccountService
from src.services.dates import week_start
from src.services.inventory_service import ordered_items
from src.services.notification_service import NotificationService
from src.services.upstream import LocalMealPlanner, MealPlanGeneratorClient, get_meal_planner

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 10


def build_meal_plan(
    account_id: int, monday: date, result: MealPlanGenerationResponse
) -> MealPlan:
    """Row for a planner result; plan body and gaps are stored as separate JSON texts."""
    return MealPlan(
        account_id=account_id,
        week_start_date=monday,
        plan_data=json.dumps(result.meal_plan.model_dump(mode="json")),
        shopping_gaps=json.dumps([gap.model_dump(mode="json") for gap in result.shopping_gaps]),
    )


class MealPlanService:
    """Service for meal plan operations."""

    def __init__(
        self,
        db: Session,
        planner: MealPlanGeneratorClient | LocalMealPlanner | None = None,
        notifier: NotificationService | None = None,
    ):
        self.db = db
        self.planner = planner or get_meal_planner()
        self.notifier = notifier or NotificationService(db)

    async def generate(
        self, account_id: int, week_start_date: date | str | None = None
    ) -> MealPlan:
        """Generate and store a plan for the week containing ``week_start_date``.

        Each call stores a new row, even for a week that already has a plan.
        When the account has auto-send enabled the plan is posted to Slack
        after it is committed; delivery problems are logged, not raised.
        """
        account = AccountService(self.db).get(account_id)
        inventory = ordered_items(self.db, account.id)
        monday = week_start(week_start_date)

        result = await self.planner.generate(inventory, monday)

        meal_plan = build_meal_plan(account.id, monday, result)
        self.db.add(meal_plan)
        self.db.commit()
        self.db.refresh(meal_plan)
        logger.info(f"Generated meal plan {meal_plan.id} for account {account.id}, week {monday}")

        if account.auto_send_slack and account.slack_channel:
            delivery = await self.notifier.send_meal_plan(meal_plan.id)
            if delivery.success:
                logger.info(f"Auto-sent meal plan {meal_plan.id} to {delivery.channel}")
            else:
                logger.warning(f"Auto-send of meal plan {meal_plan.id} failed: {delivery.message}")

        return meal_plan

    def get_for_week(self, account_id: int, week_start_date: date | None = None) -> MealPlan | None:
        """Newest plan stored for the given week (current week by default).

        An explicit date is matched as-is against stored week starts.
        """
        target = week_start_date if week_start_date is not None else week_start()
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.account_id == account_id, MealPlan.week_start_date == target)
            .order_by(MealPlan.created_at.desc(), MealPlan.id.desc())
            .first()
        )

    def list_recent(self, account_id: int, limit: int = DEFAULT_RECENT_LIMIT) -> list[MealPlan]:
        """Most recent plans by week, newest week first."""
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.account_id == account_id)
            .order_by(MealPlan.week_start_date.desc(), MealPlan.id.desc())
            .limit(limit)
            .all()
        )
