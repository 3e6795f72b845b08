"""Inventory service for mirroring a household's inventory source."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.models.inventory import InventoryItem
from src.services.account_service import AccountService
from src.services.dates import is_expiring_soon
from src.services.upstream import InventorySourceClient

logger = logging.getLogger(__name__)


def ordered_items(db: Session, account_id: int) -> list[InventoryItem]:
    """Stored items soonest-expiring first, undated items last, then by name."""
    return (
        db.query(InventoryItem)
        .filter(InventoryItem.account_id == account_id)
        .order_by(InventoryItem.expiry_date.asc().nullslast(), InventoryItem.name.asc())
        .all()
    )


class InventoryService:
    """Service for inventory sync and lookups."""

    def __init__(self, db: Session, source: InventorySourceClient | None = None):
        self.db = db
        self.source = source or InventorySourceClient()

    async def refresh(self, account_id: int, now: datetime | None = None) -> list[InventoryItem]:
        """Replace the local inventory with the source's current snapshot.

        The delete and the inserts share one transaction, so a failed
        refresh leaves the previous inventory in place.
        """
        account = AccountService(self.db).get(account_id)
        payload = await self.source.fetch_inventory(
            account.inventory_endpoint, account.household_id
        )

        now = now or datetime.now(UTC)
        try:
            self.db.query(InventoryItem).filter(InventoryItem.account_id == account.id).delete(
                synchronize_session=False
            )
            self.db.add_all(
                InventoryItem(
                    account_id=account.id,
                    name=entry.name,
                    quantity=entry.quantity,
                    unit=entry.unit,
                    expiry_date=entry.expiry_date,
                    is_expiring_soon=is_expiring_soon(entry.expiry_date, now),
                )
                for entry in payload.items
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Refreshed inventory for account {account.id}: {len(payload.items)} items")
        return self.list_items(account.id, now=now)

    def list_items(self, account_id: int, now: datetime | None = None) -> list[InventoryItem]:
        """List items with the expiring flag recomputed for ``now``."""
        items = ordered_items(self.db, account_id)
        now = now or datetime.now(UTC)
        for item in items:
            item.is_expiring_soon = is_expiring_soon(item.expiry_date, now)
        return items
