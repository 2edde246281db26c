"""
Errors raised by the short URL service.

Each error carries a stable ``error`` summary and optional ``details`` and
can be rendered as the JSON payload returned to clients.
"""


class ShortUrlError(Exception):
    """Base exception for short URL requests."""

    error: str = "Error"

    def __init__(self, error: str | None = None, details: str | None = None):
        self.error = error or self.error
        self.details = details
        super().__init__(self.error if details is None else f"{self.error}: {details}")

    def to_payload(self) -> dict[str, str]:
        payload = {"error": self.error}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ShortUrlValidationError(ShortUrlError):
    """Raised when the request is missing data the caller must supply."""

    error = "Bad request"


class ShortUrlConflictError(ShortUrlError):
    """Raised when a mapping for the long URL already exists."""

    error = "URL already exists"


class ShortUrlInternalError(ShortUrlError):
    """Raised for store failures, generator misuse and anything unexpected."""

    error = "Internal server error"
