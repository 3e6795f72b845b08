"""Account service for connecting households and editing preferences."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.account import Account
from src.schemas.account import AccountSettingsUpdate
from src.services.errors import NotFoundError

logger = logging.getLogger(__name__)


class AccountService:
    """Service for account-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, account_id: int) -> Account:
        """Get an account by id or raise NotFoundError."""
        account = self.db.query(Account).filter(Account.id == account_id).first()
        if not account:
            raise NotFoundError(f"User with id {account_id} not found")
        return account

    def get_by_household(self, household_id: str) -> Account | None:
        """Look up the account for a household, if any."""
        if not household_id:
            return None
        return self.db.query(Account).filter(Account.household_id == household_id).first()

    def connect(
        self,
        household_id: str,
        inventory_endpoint: str,
        slack_channel: str | None = None,
        auto_send_slack: bool = False,
    ) -> Account:
        """Create or update the account for ``household_id``.

        Reconnecting overwrites the endpoint and preferences while keeping
        the id and created_at of the existing row.
        """
        account = self.get_by_household(household_id)
        if account:
            self._apply_connection(account, inventory_endpoint, slack_channel, auto_send_slack)
            self.db.commit()
            self.db.refresh(account)
            logger.info(f"Updated connection for household {household_id}")
            return account

        account = Account(
            household_id=household_id,
            inventory_endpoint=inventory_endpoint,
            slack_channel=slack_channel,
            auto_send_slack=auto_send_slack,
        )
        self.db.add(account)
        try:
            self.db.commit()
        except IntegrityError:
            # Another request connected the same household first
            self.db.rollback()
            account = self.get_by_household(household_id)
            if account is None:
                raise
            self._apply_connection(account, inventory_endpoint, slack_channel, auto_send_slack)
            self.db.commit()
        self.db.refresh(account)
        logger.info(f"Connected household {household_id} as account {account.id}")
        return account

    def update_settings(self, account_id: int, changes: AccountSettingsUpdate) -> Account:
        """Apply only the explicitly supplied settings."""
        account = self.get(account_id)

        if "slack_channel" in changes.model_fields_set:
            account.slack_channel = changes.slack_channel
        if "auto_send_slack" in changes.model_fields_set and changes.auto_send_slack is not None:
            account.auto_send_slack = changes.auto_send_slack
        account.touch()

        self.db.commit()
        self.db.refresh(account)
        return account

    @staticmethod
    def _apply_connection(
        account: Account,
        inventory_endpoint: str,
        slack_channel: str | None,
        auto_send_slack: bool,
    ) -> None:
        account.inventory_endpoint = inventory_endpoint
        account.slack_channel = slack_channel
        account.auto_send_slack = auto_send_slack
        account.touch()
