"""Value objects for the user domain."""

from safeplay_identity.domain.user.value_objects.user_role import UserRole
from safeplay_identity.domain.user.value_objects.username import (
    USERNAME_MAX_LENGTH,
    Username,
)

__all__ = [
    "USERNAME_MAX_LENGTH",
    "UserRole",
    "Username",
]
