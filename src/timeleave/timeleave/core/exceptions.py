class DomainError(Exception):
    """Base exception for errors that are not business-rule rejections."""


class ValidationError(DomainError):
    """Raised when request fields are missing or malformed."""


class AuthenticationError(DomainError):
    """Raised when no employee identity is attached to the request."""


class StoreError(DomainError):
    """Raised when the backing store is unavailable or a transaction fails."""
