class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidCredentialsError(DomainError):
    """Raised when login credentials are invalid.

    Unknown usernames and wrong passwords share this error and its message.
    """


class UserNotFoundError(DomainError):
    """Raised when a referenced user does not exist."""


class BusyError(DomainError):
    """Raised when a check-in/out is already in flight for the user."""


class IpLookupError(DomainError):
    """Raised when the client IP address cannot be determined."""


class GeolocationError(DomainError):
    """Raised when the location lookup fails (permission denied, unavailable...)."""


class InvalidQrPayloadError(DomainError):
    """Raised when a scanned QR payload is not the office code."""
