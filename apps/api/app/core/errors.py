"""Domain errors raised by services and translated to HTTP errors by routers."""


class NotFoundError(LookupError):
    """Requested record does not exist."""


class ConflictError(ValueError):
    """Write would violate a uniqueness rule."""


class ReadOnlySourceError(ValueError):
    """Write targets rows owned by the booking sync (create/delete are not allowed)."""


class InvalidSchemaError(ValueError):
    """A program type's stored field schema cannot be interpreted."""
