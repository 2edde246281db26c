"""
Registry-specific exceptions.

These exceptions are the only errors a UrlRegistry lets escape; raw
database driver errors are wrapped before they leave the registry.
"""


class RegistryError(Exception):
    """Base exception for registry operations."""

    pass


class StoreUnavailableError(RegistryError):
    """Raised when the backing store cannot be reached or a query fails."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Database error during {operation}: {reason}")


class StoreTimeoutError(StoreUnavailableError):
    """Raised when a store call exceeds its timeout."""

    pass


class ShortCodeCollisionError(RegistryError):
    """Raised when every generated short code already exists."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not generate a unique short code after {attempts} attempts")
