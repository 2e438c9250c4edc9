from .base import AuthenticationError


class InvalidCredentialsError(AuthenticationError):
    """Raised when credentials are missing, invalid or expired."""
    pass
