"""Health check schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Reachability of the store and upstream services."""

    status: Literal["ok", "degraded", "error"]
    timestamp: datetime
    database: bool
    external_apis: bool
