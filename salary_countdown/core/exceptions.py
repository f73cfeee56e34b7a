"""Exceptions raised by the income domain and its storage layer."""


class IncomeError(Exception):
    """Base exception for salary countdown failures."""


class NotFoundError(IncomeError):
    """Raised when a referenced settings record or session does not exist."""


class InvalidConfigurationError(IncomeError):
    """Raised when a salary configuration cannot produce a finite rate."""


class PersistenceError(IncomeError):
    """Raised when the backing store fails unexpectedly."""


class ConflictError(PersistenceError):
    """Raised when a write would open a second active session for one settings id."""
