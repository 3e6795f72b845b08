"""Health check endpoint."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.database import get_db
from src.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def check_database(db: Session) -> bool:
    """Run a trivial query to confirm the store is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return False


def overall_status(database: bool, external_apis: bool) -> str:
    if database and external_apis:
        return "ok"
    if database or external_apis:
        return "degraded"
    return "error"


@router.get("/health", response_model=HealthResponse)
def health_check(db: Annotated[Session, Depends(get_db)]):
    """Report store reachability and upstream availability."""
    database = check_database(db)
    # Upstream services are only contacted on demand
    external_apis = True
    return HealthResponse(
        status=overall_status(database, external_apis),
        timestamp=datetime.now(UTC),
        database=database,
        external_apis=external_apis,
    )
