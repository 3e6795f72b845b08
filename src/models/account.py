"""Household account model."""

from sqlalchemy import Boolean, Column, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Account(Base, TimestampMixin):
    """Connection settings for one household."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    household_id = Column(String(255), unique=True, nullable=False, index=True)
    inventory_endpoint = Column(Text, nullable=False)
    slack_channel = Column(String(255), nullable=True)
    auto_send_slack = Column(Boolean, nullable=False, default=False, server_default="false")

    # Relationships
    inventory_items = relationship(
        "InventoryItem",
        back_populates="account",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    meal_plans = relationship(
        "MealPlan",
        back_populates="account",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
