class GCalFeedClientError(Exception):
    """Base exception for all calendar feed client errors."""
    pass


class AuthenticationError(GCalFeedClientError):
    """Raised when authentication fails."""
    pass


class APIError(GCalFeedClientError):
    """Raised when feed requests fail."""
    pass


class ValidationError(GCalFeedClientError):
    """Raised when input validation fails."""
    pass
