"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError so callers can
catch every storage failure with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when database connection or initialization fails.

    Examples:
    - Invalid database URL format
    - Database file not accessible
    - SQLite driver not available
    """

    pass


class RecordNotFoundError(PersistenceError):
    """Raised when a required record is not found.

    For optional lookups, methods return None instead of raising this.
    """

    pass


class DataIntegrityError(PersistenceError):
    """Raised when a write would store invalid data.

    Examples:
    - Empty key
    - Value that cannot be serialized to JSON
    """

    pass


class CorruptValueError(PersistenceError):
    """Raised when a stored value can no longer be decoded."""

    pass


class BlobNotFoundError(PersistenceError):
    """Raised when a blob path does not resolve to a stored file."""

    pass
