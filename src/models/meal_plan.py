"""Meal plan model."""

from sqlalchemy import Column, Date, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class MealPlan(Base, TimestampMixin):
    """A generated weekly plan for one household.

    ``plan_data`` and ``shopping_gaps`` hold JSON text exactly as returned by
    the planner, so a stored plan can be re-rendered without re-planning.
    """

    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week_start_date = Column(Date, nullable=False, index=True)  # Always a Monday
    plan_data = Column(Text, nullable=False)
    shopping_gaps = Column(Text, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="meal_plans")
