"""Custom exceptions for coffee-dex."""


class CoffeeDexError(Exception):
    """Base exception for coffee-dex."""

    pass


class ValidationError(CoffeeDexError):
    """Raised when a tasting record has malformed or out-of-range values."""

    pass


class NotFoundError(CoffeeDexError):
    """Raised when a tasting record or mapping does not exist."""

    pass


class ExternalServiceError(CoffeeDexError):
    """Raised when the refiner service fails or returns an unusable answer.

    Never surfaced to callers of the mapping pipeline; the rule-based
    fallback takes over instead.
    """

    pass


class AuthenticationError(ExternalServiceError):
    """Raised when the refiner API key is invalid or missing."""

    pass


class RateLimitError(ExternalServiceError):
    """Raised when the refiner API rate limit is exceeded."""

    pass


class ExhaustionError(CoffeeDexError):
    """Raised when no unused candidate remains in a category.

    Terminal: the collection for that category is complete.
    """

    def __init__(self, category: str, message: str | None = None):
        self.category = category
        super().__init__(message or f"collection complete for category '{category}'")


class PersistenceError(CoffeeDexError):
    """Raised when storage fails for a reason other than a uniqueness conflict."""

    pass
