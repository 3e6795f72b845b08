"""Account schemas."""

from datetime import datetime

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field


class AccountConnect(BaseModel):
    """Connect a household to its inventory source."""

    household_id: str = Field(..., min_length=1, max_length=255)
    inventory_endpoint: AnyHttpUrl
    slack_channel: str | None = Field(None, max_length=255)
    auto_send_slack: bool = False


class AccountSettingsUpdate(BaseModel):
    """Partial update of account preferences.

    Only fields present in the request body are applied; an explicit
    ``"slack_channel": null`` clears the channel.
    """

    slack_channel: str | None = Field(None, max_length=255)
    auto_send_slack: bool | None = None


class AccountResponse(BaseModel):
    """Account response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    household_id: str
    inventory_endpoint: str
    slack_channel: str | None
    auto_send_slack: bool
    created_at: datetime
    updated_at: datetime
