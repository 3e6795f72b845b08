"""Pytest configuration and fixtures."""

import os

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_inventory_source, get_planner, get_slack_client
from src.database import Base, build_engine, get_db
from src.main import app
from src.models.account import Account
from src.services.errors import UpstreamError
from src.services.upstream import InventorySourceClient, LocalMealPlanner

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/meal_planner", "/meal_planner_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


class FakeSlack:
    """Records messages instead of posting them."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.messages: list[tuple[str, str]] = []

    async def post_message(self, channel: str, text: str) -> None:
        if self.error:
            raise self.error
        self.messages.append((channel, text))


class InventoryEndpoint:
    """Serves a canned inventory payload through httpx.MockTransport."""

    def __init__(self, payload: dict | None = None, status_code: int = 200):
        self.payload = payload if payload is not None else {"status": "success", "items": []}
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    def client(self) -> InventorySourceClient:
        return InventorySourceClient(transport=httpx.MockTransport(self.handler))


class FailingPlanner:
    async def generate(self, inventory, week_start_date):
        raise UpstreamError("Meal plan service returned an invalid response")


@pytest.fixture
def fake_slack():
    return FakeSlack()


@pytest.fixture
def inventory_endpoint():
    return InventoryEndpoint()


@pytest.fixture
def failing_planner():
    return FailingPlanner()


@pytest.fixture(scope="function")
def client(db, fake_slack, inventory_endpoint):
    """Create a test client with database and upstream overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_slack_client] = lambda: fake_slack
    app.dependency_overrides[get_planner] = LocalMealPlanner
    app.dependency_overrides[get_inventory_source] = inventory_endpoint.client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def account(db):
    """A connected household with a Slack channel but auto-send off."""
    account = Account(
        household_id="test-household-123",
        inventory_endpoint="https://inventory.example.com/api/items",
        slack_channel="#meal-planning",
        auto_send_slack=False,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


@pytest.fixture
def plan_payload() -> dict:
    """A two-day plan in the generation service's format."""
    return {
        "week_start_date": "2024-01-01",
        "daily_meals": [
            {
                "date": "2024-01-01",
                "breakfast": {
                    "title": "Scrambled Eggs with Toast",
                    "ingredients_summary": "eggs, bread, butter",
                },
                "lunch": {
                    "title": "Greek Salad",
                    "ingredients_summary": "lettuce, tomatoes, olives, feta cheese",
                },
                "dinner": {
                    "title": "Grilled Chicken with Rice",
                    "ingredients_summary": "chicken breast, rice, vegetables",
                },
            },
            {
                "date": "2024-01-02",
                "breakfast": {
                    "title": "Oatmeal with Berries",
                    "ingredients_summary": "oats, mixed berries, honey",
                },
                "lunch": {
                    "title": "Turkey Sandwich",
                    "ingredients_summary": "turkey, bread, lettuce, mayo",
                },
                "dinner": {
                    "title": "Pasta Bolognese",
                    "ingredients_summary": "pasta, ground beef, tomato sauce",
                },
            },
        ],
    }


@pytest.fixture
def gaps_payload() -> list[dict]:
    """Shopping gaps matching plan_payload."""
    return [
        {
            "ingredient": "eggs",
            "quantity_needed": "6 pieces",
            "used_for_meals": ["Scrambled Eggs with Toast"],
        },
        {
            "ingredient": "mixed berries",
            "quantity_needed": "1 cup",
            "used_for_meals": ["Oatmeal with Berries"],
        },
    ]
