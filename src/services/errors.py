"""Domain errors raised by the service layer."""


class MealPlannerError(Exception):
    """Base class for service errors."""


class NotFoundError(MealPlannerError):
    """A referenced account or meal plan does not exist."""


class UpstreamError(MealPlannerError):
    """An external service failed or returned an unusable payload."""
