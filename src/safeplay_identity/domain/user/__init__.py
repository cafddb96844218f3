"""User domain manages SafePlay account identity.

This domain handles:
- User aggregate (username, display name, password hash, role)
- Validation of usernames and display names
- The repository contract for persisting users
"""

from safeplay_identity.domain.user.aggregates import DISPLAY_NAME_MAX_LENGTH, User
from safeplay_identity.domain.user.exceptions import (
    InvalidDisplayNameError,
    InvalidUsernameError,
    UserNotFoundError,
    UsernameAlreadyExistsError,
)
from safeplay_identity.domain.user.repositories import UserRepository
from safeplay_identity.domain.user.value_objects import (
    USERNAME_MAX_LENGTH,
    Username,
    UserRole,
)

__all__ = [
    "DISPLAY_NAME_MAX_LENGTH",
    "USERNAME_MAX_LENGTH",
    "InvalidDisplayNameError",
    "InvalidUsernameError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "Username",
    "UsernameAlreadyExistsError",
]
