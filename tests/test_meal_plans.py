"""Meal plan generation and lookup tests."""

import json
from datetime import date, timedelta

import httpx
import pytest

from src.models.inventory import InventoryItem
from src.models.meal_plan import MealPlan
from src.services.dates import week_start
from src.services.errors import NotFoundError, UpstreamError
from src.services.meal_plan_service import MealPlanService
from src.services.notification_service import NotificationService
from src.services.upstream import LocalMealPlanner, MealPlanGeneratorClient


@pytest.fixture
def stocked_account(db, account):
    """Account with a couple of inventory items."""
    db.add_all(
        [
            InventoryItem(
                account_id=account.id,
                name="Chicken Breast",
                quantity=2,
                unit="pieces",
                expiry_date=date(2024, 12, 30),
            ),
            InventoryItem(
                account_id=account.id,
                name="Lettuce",
                quantity=1,
                unit="head",
                expiry_date=date(2024, 12, 25),
            ),
        ]
    )
    db.commit()
    return account


def _service(db, slack):
    return MealPlanService(db, LocalMealPlanner(), NotificationService(db, slack))


@pytest.mark.asyncio
async def test_generate_meal_plan(db, stocked_account, fake_slack):
    """Test generating and storing a plan."""
    plan = await _service(db, fake_slack).generate(stocked_account.id, "2024-12-23")

    assert plan.id is not None
    assert plan.account_id == stocked_account.id
    assert plan.week_start_date == date(2024, 12, 23)

    body = json.loads(plan.plan_data)
    assert body["week_start_date"] == "2024-12-23"
    assert len(body["daily_meals"]) == 7
    assert body["daily_meals"][0]["date"] == "2024-12-23"
    # Soonest-expiring item is used first
    assert body["daily_meals"][0]["breakfast"]["title"] == "Lettuce Omelette"
    assert isinstance(json.loads(plan.shopping_gaps), list)
    assert db.query(MealPlan).count() == 1


@pytest.mark.asyncio
async def test_generate_normalizes_weekend_to_monday(db, stocked_account, fake_slack):
    plan = await _service(db, fake_slack).generate(stocked_account.id, "2024-12-21")

    assert plan.week_start_date == date(2024, 12, 16)


@pytest.mark.asyncio
async def test_generate_defaults_to_current_week(db, stocked_account, fake_slack):
    plan = await _service(db, fake_slack).generate(stocked_account.id)

    assert plan.week_start_date == week_start()
    assert plan.week_start_date.weekday() == 0


@pytest.mark.asyncio
async def test_generate_with_empty_inventory(db, account, fake_slack):
    plan = await _service(db, fake_slack).generate(account.id, date(2024, 1, 3))

    assert plan.week_start_date == date(2024, 1, 1)
    gaps = json.loads(plan.shopping_gaps)
    assert "seasonal vegetables" in {g["ingredient"] for g in gaps}


@pytest.mark.asyncio
async def test_generate_missing_account(db, fake_slack):
    with pytest.raises(NotFoundError, match="User with id 99999 not found"):
        await _service(db, fake_slack).generate(99999)


@pytest.mark.asyncio
async def test_generate_same_week_twice_keeps_both(db, stocked_account, fake_slack):
    """Test that regenerating a week stores a second plan."""
    service = _service(db, fake_slack)

    first = await service.generate(stocked_account.id, "2024-12-23")
    second = await service.generate(stocked_account.id, "2024-12-24")

    assert first.id != second.id
    assert db.query(MealPlan).count() == 2
    assert service.get_for_week(stocked_account.id, date(2024, 12, 23)).id == second.id


@pytest.mark.asyncio
async def test_generate_auto_sends_to_slack(db, stocked_account, fake_slack):
    stocked_account.auto_send_slack = True
    db.commit()

    plan = await _service(db, fake_slack).generate(stocked_account.id, "2024-12-23")

    assert len(fake_slack.messages) == 1
    channel, text = fake_slack.messages[0]
    assert channel == "#meal-planning"
    assert "December 23, 2024" in text
    assert plan.id is not None


@pytest.mark.asyncio
async def test_generate_without_auto_send_does_not_notify(db, stocked_account, fake_slack):
    await _service(db, fake_slack).generate(stocked_account.id, "2024-12-23")

    assert fake_slack.messages == []


@pytest.mark.asyncio
async def test_generate_auto_send_without_channel_is_skipped(db, stocked_account, fake_slack):
    stocked_account.auto_send_slack = True
    stocked_account.slack_channel = None
    db.commit()

    plan = await _service(db, fake_slack).generate(stocked_account.id, "2024-12-23")

    assert plan.id is not None
    assert fake_slack.messages == []


@pytest.mark.asyncio
async def test_generate_survives_slack_failure(db, stocked_account, fake_slack):
    """Test that a failed notification does not undo the plan."""
    stocked_account.auto_send_slack = True
    db.commit()
    fake_slack.error = RuntimeError("channel_not_found")

    plan = await _service(db, fake_slack).generate(stocked_account.id, "2024-12-23")

    assert db.query(MealPlan).filter(MealPlan.id == plan.id).count() == 1


@pytest.mark.asyncio
async def test_generate_planner_failure_stores_nothing(db, stocked_account, failing_planner):
    service = MealPlanService(db, failing_planner, NotificationService(db))

    with pytest.raises(UpstreamError):
        await service.generate(stocked_account.id, "2024-12-23")

    assert db.query(MealPlan).count() == 0


@pytest.mark.asyncio
async def test_generate_with_remote_planner(db, stocked_account, fake_slack, plan_payload):
    """Test the remote generator contract end to end."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"status": "success", "meal_plan": plan_payload, "shopping_gaps": []},
        )

    planner = MealPlanGeneratorClient(
        base_url="https://planner.example.com/generate",
        transport=httpx.MockTransport(handler),
    )
    service = MealPlanService(db, planner, NotificationService(db, fake_slack))

    plan = await service.generate(stocked_account.id, "2024-12-23")

    assert seen["body"]["week_start_date"] == "2024-12-23"
    assert {i["name"] for i in seen["body"]["inventory"]} == {"Chicken Breast", "Lettuce"}
    # Both stored dates are in the past, so the flags sent are computed at send time
    assert all(i["is_expiring_soon"] for i in seen["body"]["inventory"])
    assert json.loads(plan.plan_data) == plan_payload
    assert json.loads(plan.shopping_gaps) == []


@pytest.mark.asyncio
async def test_generate_leaves_stored_inventory_untouched(db, stocked_account, fake_slack):
    """Test that planning reads the inventory without rewriting its stored flags."""
    await _service(db, fake_slack).generate(stocked_account.id, "2024-12-23")

    db.expire_all()
    flags = {i.name: i.is_expiring_soon for i in db.query(InventoryItem).all()}
    assert flags == {"Chicken Breast": False, "Lettuce": False}


# --- Readers ---


def _store_plan(db, account_id, monday):
    plan = MealPlan(
        account_id=account_id,
        week_start_date=monday,
        plan_data=json.dumps({"week_start_date": monday.isoformat(), "daily_meals": []}),
        shopping_gaps="[]",
    )
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


def test_get_for_week_matches_explicit_date(db, account):
    stored = _store_plan(db, account.id, date(2024, 1, 1))
    service = MealPlanService(db, LocalMealPlanner())

    assert service.get_for_week(account.id, date(2024, 1, 1)).id == stored.id
    # Explicit dates are not normalized
    assert service.get_for_week(account.id, date(2024, 1, 3)) is None


def test_get_for_week_defaults_to_current_week(db, account):
    stored = _store_plan(db, account.id, week_start())

    found = MealPlanService(db, LocalMealPlanner()).get_for_week(account.id)

    assert found.id == stored.id


def test_get_for_week_other_account(db, account):
    from src.models.account import Account

    other = Account(household_id="other", inventory_endpoint="https://x.example.com/inv")
    db.add(other)
    db.commit()
    _store_plan(db, other.id, date(2024, 1, 1))

    assert MealPlanService(db, LocalMealPlanner()).get_for_week(account.id, date(2024, 1, 1)) is None


def test_list_recent_orders_and_limits(db, account):
    """Test newest-week-first ordering and the limit."""
    base = date(2024, 1, 1)
    for weeks in (2, 0, 5, 1, 3):
        _store_plan(db, account.id, base + timedelta(weeks=weeks))
    service = MealPlanService(db, LocalMealPlanner())

    recent = service.list_recent(account.id, limit=3)

    assert [p.week_start_date for p in recent] == [
        base + timedelta(weeks=5),
        base + timedelta(weeks=3),
        base + timedelta(weeks=2),
    ]


def test_list_recent_default_limit(db, account):
    base = date(2024, 1, 1)
    for weeks in range(12):
        _store_plan(db, account.id, base + timedelta(weeks=weeks))

    assert len(MealPlanService(db, LocalMealPlanner()).list_recent(account.id)) == 10


# --- API ---


def test_generate_meal_plan_endpoint(client, account):
    response = client.post(
        f"/api/v1/accounts/{account.id}/meal-plans",
        json={"week_start_date": "2024-12-21"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["week_start_date"] == "2024-12-16"
    assert json.loads(data["plan_data"])["week_start_date"] == "2024-12-16"


def test_generate_meal_plan_endpoint_without_body(client, account):
    response = client.post(f"/api/v1/accounts/{account.id}/meal-plans")
    assert response.status_code == 201
    assert date.fromisoformat(response.json()["week_start_date"]).weekday() == 0


def test_generate_meal_plan_endpoint_rejects_bad_date(client, account):
    response = client.post(
        f"/api/v1/accounts/{account.id}/meal-plans",
        json={"week_start_date": "next tuesday"},
    )
    assert response.status_code == 422


def test_generate_meal_plan_endpoint_not_found(client):
    response = client.post("/api/v1/accounts/99999/meal-plans", json={})
    assert response.status_code == 404


def test_get_meal_plan_endpoint(client, db, account):
    stored = _store_plan(db, account.id, date(2024, 1, 1))

    response = client.get(
        f"/api/v1/accounts/{account.id}/meal-plans/week",
        params={"week_start_date": "2024-01-01"},
    )
    assert response.status_code == 200
    assert response.json()["id"] == stored.id

    missing = client.get(
        f"/api/v1/accounts/{account.id}/meal-plans/week",
        params={"week_start_date": "2024-02-05"},
    )
    assert missing.status_code == 404


def test_list_recent_meal_plans_endpoint(client, db, account):
    for weeks in range(3):
        _store_plan(db, account.id, date(2024, 1, 1) + timedelta(weeks=weeks))

    response = client.get(f"/api/v1/accounts/{account.id}/meal-plans", params={"limit": 2})

    assert response.status_code == 200
    assert [p["week_start_date"] for p in response.json()] == ["2024-01-15", "2024-01-08"]


def test_list_recent_meal_plans_endpoint_rejects_bad_limit(client, account):
    response = client.get(f"/api/v1/accounts/{account.id}/meal-plans", params={"limit": 0})
    assert response.status_code == 422
