class RepositoryError(Exception):
    """Base repository error."""


class RepositoryUnavailableError(RepositoryError):
    """Raised when the database is unavailable or not configured."""


class RepositoryNotFoundError(RepositoryError):
    """Raised when the requested entity does not exist."""


class RepositoryConflictError(RepositoryError):
    """Raised when a create would duplicate an existing unique key."""


class RepositoryValidationError(RepositoryError):
    """Raised when payload or filter validation fails before a query is built."""
