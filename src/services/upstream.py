"""Clients for the inventory source, meal plan generator and Slack."""

import json
import logging
from collections.abc import Sequence
from datetime import UTC, date, datetime, timedelta
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from src.config import get_settings
from src.models.inventory import InventoryItem
from src.schemas.upstream import InventorySourceResponse, MealPlanGenerationResponse
from src.services.dates import is_expiring_soon
from src.services.errors import UpstreamError

logger = logging.getLogger(__name__)

HOUSEHOLD_HEADER = "X-Household-ID"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse_response(response: httpx.Response, model: type[ModelT], service: str) -> ModelT:
    """Validate a JSON response body against ``model``."""
    try:
        return model.model_validate(response.json())
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"{service} returned an invalid payload: {e}")
        raise UpstreamError(f"{service} returned an invalid response") from e


def _serialize_inventory(items: Sequence[InventoryItem]) -> list[dict[str, Any]]:
    now = datetime.now(UTC)
    return [
        {
            "name": item.name,
            "quantity": item.quantity,
            "unit": item.unit,
            "expiry_date": item.expiry_date.isoformat() if item.expiry_date else None,
            "is_expiring_soon": is_expiring_soon(item.expiry_date, now),
        }
        for item in items
    ]


class InventorySourceClient:
    """Reads a household's inventory from its configured endpoint."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = get_settings()
        self.timeout = self.settings.upstream_timeout_seconds
        self._transport = transport

    async def fetch_inventory(self, endpoint: str, household_id: str) -> InventorySourceResponse:
        """Fetch and validate the current inventory snapshot."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(endpoint, headers={HOUSEHOLD_HEADER: household_id})
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Inventory source returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Inventory source unreachable: {e}") from e

        payload = _parse_response(response, InventorySourceResponse, "Inventory source")
        if payload.status != "success":
            raise UpstreamError(f"Inventory source reported status '{payload.status}'")
        return payload


class MealPlanGeneratorClient:
    """Remote meal plan generation service."""

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = get_settings()
        self.url = base_url or self.settings.meal_plan_api_url
        self.timeout = self.settings.upstream_timeout_seconds
        self._transport = transport

    async def generate(
        self, inventory: Sequence[InventoryItem], week_start_date: date
    ) -> MealPlanGenerationResponse:
        """Request a weekly plan built from ``inventory``."""
        headers = {}
        if self.settings.meal_plan_api_key:
            headers["Authorization"] = f"Bearer {self.settings.meal_plan_api_key}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.url,
                    headers=headers,
                    json={
                        "week_start_date": week_start_date.isoformat(),
                        "inventory": _serialize_inventory(inventory),
                    },
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Meal plan service returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Meal plan service unreachable: {e}") from e

        payload = _parse_response(response, MealPlanGenerationResponse, "Meal plan service")
        if payload.status != "success":
            raise UpstreamError(f"Meal plan service reported status '{payload.status}'")
        return payload


# Each meal features one inventory item plus a staple it is served with.
MEAL_TEMPLATES = {
    "breakfast": ("{item} Omelette", "eggs"),
    "lunch": ("{item} Salad", "mixed greens"),
    "dinner": ("{item} with Rice", "rice"),
}

FALLBACK_FEATURE = "Seasonal Vegetables"


class LocalMealPlanner:
    """Deterministic planner used when no generation service is configured.

    Items that expire first are featured first; staples that are not in the
    inventory are reported as shopping gaps.
    """

    async def generate(
        self, inventory: Sequence[InventoryItem], week_start_date: date
    ) -> MealPlanGenerationResponse:
        ordered = sorted(
            inventory,
            key=lambda i: (i.expiry_date is None, i.expiry_date or date.max, i.name.lower()),
        )
        features = [item.name for item in ordered] or [FALLBACK_FEATURE]
        on_hand = {item.name.lower().strip() for item in inventory}

        daily_meals = []
        missing: dict[str, list[str]] = {}
        slot = 0
        for offset in range(7):
            day = {"date": (week_start_date + timedelta(days=offset)).isoformat()}
            for meal, (title_template, staple) in MEAL_TEMPLATES.items():
                feature = features[slot % len(features)]
                slot += 1
                title = title_template.format(item=feature)
                day[meal] = {
                    "title": title,
                    "ingredients_summary": f"{feature.lower()}, {staple}",
                }
                for ingredient in (feature.lower(), staple):
                    if ingredient not in on_hand:
                        meals = missing.setdefault(ingredient, [])
                        if title not in meals:
                            meals.append(title)
            daily_meals.append(day)

        shopping_gaps = [
            {
                "ingredient": ingredient,
                "quantity_needed": f"enough for {len(meals)} meals",
                "used_for_meals": meals,
            }
            for ingredient, meals in missing.items()
        ]

        return MealPlanGenerationResponse.model_validate(
            {
                "status": "success",
                "meal_plan": {
                    "week_start_date": week_start_date.isoformat(),
                    "daily_meals": daily_meals,
                },
                "shopping_gaps": shopping_gaps,
            }
        )


class SlackClient:
    """Posts plain-text messages through the Slack Web API."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = get_settings()
        self.base_url = self.settings.slack_api_url.rstrip("/")
        self.timeout = self.settings.upstream_timeout_seconds
        self._transport = transport

    async def post_message(self, channel: str, text: str) -> None:
        """Send ``text`` to ``channel``; raises on any delivery failure."""
        if not self.settings.slack_configured:
            raise UpstreamError("Slack delivery is not configured")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                f"{self.base_url}/chat.postMessage",
                headers={"Authorization": f"Bearer {self.settings.slack_bot_token}"},
                json={"channel": channel, "text": text},
            )
            response.raise_for_status()
            data = response.json()

        if not data.get("ok", False):
            raise UpstreamError(f"Slack API error: {data.get('error', 'unknown error')}")
        logger.info(f"Posted message to Slack channel {channel}")


def get_meal_planner() -> MealPlanGeneratorClient | LocalMealPlanner:
    """Remote generator when configured, local planner otherwise."""
    if get_settings().meal_plan_api_url:
        return MealPlanGeneratorClient()
    logger.info("MEAL_PLAN_API_URL not configured, using local planner")
    return LocalMealPlanner()
