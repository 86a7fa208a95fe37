"""
Base domain exceptions.
"""


class GardienException(Exception):
    """Base exception for all Gardien domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(GardienException):
    """Raised when request input fails validation."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        message = f"Validation failed for {field}: {reason}"
        super().__init__(message, code="VALIDATION_ERROR")


class StoreUnavailableError(GardienException):
    """
    Raised when a backing store times out or cannot be reached.

    Transient: callers may retry after backoff. The service never
    retries internally.
    """

    def __init__(self, store: str, reason: str = "unavailable"):
        self.store = store
        self.reason = reason
        super().__init__(
            "Verification service is temporarily unavailable. "
            "Please try again shortly.",
            code="STORE_UNAVAILABLE",
        )
