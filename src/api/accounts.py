"""Account API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_account_service
from src.schemas.account import AccountConnect, AccountResponse, AccountSettingsUpdate
from src.services.account_service import AccountService

router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


@router.post("/connect", response_model=AccountResponse)
def connect_account(
    data: AccountConnect,
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Connect a household to its inventory source, or update the connection."""
    return service.connect(
        household_id=data.household_id,
        inventory_endpoint=str(data.inventory_endpoint),
        slack_channel=data.slack_channel,
        auto_send_slack=data.auto_send_slack,
    )


@router.patch("/{account_id}/settings", response_model=AccountResponse)
def update_account_settings(
    account_id: int,
    data: AccountSettingsUpdate,
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Update Slack preferences; omitted fields are left unchanged."""
    return service.update_settings(account_id, data)


@router.get("/by-household/{household_id}", response_model=AccountResponse)
def get_account_by_household(
    household_id: str,
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Get the account connected to a household."""
    account = service.get_by_household(household_id)
    if not account:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    return account


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """Get an account by id."""
    return service.get(account_id)
