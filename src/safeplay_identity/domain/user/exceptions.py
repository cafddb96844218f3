"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""


class InvalidUsernameError(ValueError):
    """Raised when a username is empty, too long or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidDisplayNameError(ValueError):
    """Raised when a display name is empty or too long."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UsernameAlreadyExistsError(Exception):
    """Username already registered."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username already registered: {username}")


class UserNotFoundError(Exception):
    """User not found."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"User not found: {username}")
