"""Notification service for posting meal plans to Slack."""

import logging

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.account import Account
from src.models.meal_plan import MealPlan
from src.schemas.meal_plan import DeliveryResult
from src.schemas.upstream import ShoppingGapItem, WeeklyMealPlan
from src.services.dates import parse_date
from src.services.upstream import SlackClient

logger = logging.getLogger(__name__)

SHOPPING_GAPS_ADAPTER = TypeAdapter(list[ShoppingGapItem])

MEAL_LABELS = (("breakfast", "Breakfast"), ("lunch", "Lunch"), ("dinner", "Dinner"))


def format_meal_plan_message(
    meal_plan: MealPlan,
    plan: WeeklyMealPlan,
    shopping_gaps: list[ShoppingGapItem],
) -> str:
    """Render a stored plan as Slack-flavoured plain text."""
    monday = meal_plan.week_start_date
    lines = [f"*Meal Plan for the week of {monday:%B} {monday.day}, {monday.year}*", ""]

    for day in plan.daily_meals:
        try:
            heading = f"{parse_date(day.date):%A} ({day.date})"
        except ValueError:
            heading = day.date
        lines.append(f"*{heading}*")
        for key, label in MEAL_LABELS:
            meal = getattr(day, key)
            lines.append(f"  {label}: {meal.title} ({meal.ingredients_summary})")
        lines.append("")

    if shopping_gaps:
        lines.append("*Shopping List*")
        for gap in shopping_gaps:
            meals = ", ".join(gap.used_for_meals)
            lines.append(f"  • {gap.ingredient}: {gap.quantity_needed} (for {meals})")

    return "\n".join(lines).rstrip()


class NotificationService:
    """Delivers meal plans to a household's Slack channel.

    Every failure is reported through the returned DeliveryResult, so a
    failed delivery never breaks the caller.
    """

    def __init__(self, db: Session, slack: SlackClient | None = None):
        self.db = db
        self.slack = slack or SlackClient()

    async def send_meal_plan(self, meal_plan_id: int) -> DeliveryResult:
        try:
            row = (
                self.db.query(MealPlan, Account)
                .join(Account, MealPlan.account_id == Account.id)
                .filter(MealPlan.id == meal_plan_id)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load meal plan {meal_plan_id}: {e}")
            return DeliveryResult(success=False, message="Could not load meal plan")
        if not row:
            return DeliveryResult(success=False, message="Meal plan not found")

        meal_plan, account = row
        if not account.slack_channel:
            return DeliveryResult(
                success=False, message="User does not have a Slack channel configured"
            )

        try:
            plan = WeeklyMealPlan.model_validate_json(meal_plan.plan_data)
            shopping_gaps = SHOPPING_GAPS_ADAPTER.validate_json(meal_plan.shopping_gaps)
        except ValidationError as e:
            logger.warning(f"Meal plan {meal_plan_id} has unreadable data: {e}")
            return DeliveryResult(success=False, message="Invalid meal plan data format")

        message = format_meal_plan_message(meal_plan, plan, shopping_gaps)

        try:
            await self.slack.post_message(account.slack_channel, message)
        except Exception as e:
            logger.error(f"Failed to send meal plan {meal_plan_id} to Slack: {e}")
            return DeliveryResult(success=False, message=str(e))

        return DeliveryResult(
            success=True,
            message="Meal plan sent to Slack successfully",
            channel=account.slack_channel,
        )
