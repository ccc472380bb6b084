"""Errors raised by the managers.

The API layer maps each class to an HTTP status code; managers never
translate or swallow them.
"""


class ServiceError(Exception):
    """Base class for manager errors."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ValidationError(ServiceError):
    """Malformed or out-of-range input (empty name, negative quantity...)."""


class ForeignKeyError(ServiceError):
    """Reference to a Categoria or Produto that does not exist."""


class NotFoundError(ServiceError):
    """Operation on an id that does not exist."""


class ConflictError(ServiceError):
    """Delete blocked by rows that still reference the target."""


class StoreUnavailableError(ServiceError):
    """The entity store failed or timed out."""
