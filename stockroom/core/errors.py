"""Error taxonomy shared by the store, the repository and the HTTP layer.

Every class carries the HTTP status the API layer answers with, so routers
never have to translate errors one by one.
"""


class InventoryError(Exception):
    status_code = 500
    default_message = "Inventory operation failed"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(InventoryError):
    status_code = 400
    default_message = "Invalid input"


class AuthenticationError(InventoryError):
    status_code = 401
    default_message = "Authentication required"


class NotFoundError(InventoryError):
    status_code = 404
    default_message = "Not found"


class ConflictError(InventoryError):
    """A conditional write lost against a concurrent writer."""

    status_code = 409
    default_message = "Concurrent update conflict"


class StoreUnavailableError(InventoryError):
    """The key-value store could not complete the operation. Safe to retry."""

    status_code = 503
    default_message = "Storage is unavailable"


__all__ = [
    "AuthenticationError",
    "ConflictError",
    "InventoryError",
    "NotFoundError",
    "StoreUnavailableError",
    "ValidationError",
]
