"""Inventory item model mirrored from a household's inventory source."""

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class InventoryItem(Base, TimestampMixin):
    """One food item currently held by a household."""

    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit = Column(String(50), nullable=False)
    expiry_date = Column(Date, nullable=True)
    # Snapshot taken at refresh time; readers recompute it
    is_expiring_soon = Column(Boolean, nullable=False, default=False, server_default="false")

    # Relationships
    account = relationship("Account", back_populates="inventory_items")
