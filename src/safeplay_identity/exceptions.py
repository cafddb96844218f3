"""Authentication exceptions.

These exceptions are raised by the safeplay_identity package and should be
caught and handled by the calling layer.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when username or password is incorrect."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)
