"""Error types raised by the tracker."""


class CalTrackError(Exception):
    """Base error for the tracker."""


class DivisionByZero(CalTrackError, ZeroDivisionError):
    """A per-unit value was requested with a zero divisor."""


class ProfileNotFound(CalTrackError):
    """No profile exists for the user."""


class EntryNotFound(CalTrackError):
    """The food entry does not exist."""


class RecipeNotFound(CalTrackError):
    """The recipe does not exist."""


class PersistenceError(CalTrackError):
    """A write to the store did not complete."""


class NutritionApiError(CalTrackError):
    """Food database lookup failed."""

    message = "Nutrition lookup failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidQuery(NutritionApiError):
    message = "Invalid search query"


class InvalidURL(NutritionApiError):
    message = "Invalid URL"


class NoDataReceived(NutritionApiError):
    message = "No data received"


class FoodNotFound(NutritionApiError):
    message = "Food not found"


class Unauthorized(NutritionApiError):
    message = "Invalid API credentials"


class RateLimitExceeded(NutritionApiError):
    message = "API rate limit exceeded"


class RecognitionFailed(CalTrackError):
    """The recognition service returned no usable candidate."""
