"""Date rules shared by inventory sync, meal planning and readers."""

from datetime import UTC, date, datetime, timedelta

EXPIRING_SOON_DAYS = 3


def is_expiring_soon(expiry_date: date | None, now: datetime | date) -> bool:
    """True when the item expires on or before ``now`` plus three days.

    Items without an expiry date never count as expiring.
    """
    if expiry_date is None:
        return False
    today = now.date() if isinstance(now, datetime) else now
    return expiry_date <= today + timedelta(days=EXPIRING_SOON_DAYS)


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) into a calendar date."""
    return datetime.fromisoformat(value.strip()).date()


def week_start(value: date | datetime | str | None = None) -> date:
    """Monday of the week containing ``value`` (today when omitted).

    A Monday maps to itself, so the function is idempotent.
    """
    if value is None:
        day = datetime.now(UTC).date()
    elif isinstance(value, str):
        day = parse_date(value)
    elif isinstance(value, datetime):
        day = value.date()
    else:
        day = value
    return day - timedelta(days=day.weekday())
