"""SafePlay Identity - user store and credential validation.

This package handles:
- The User aggregate and its repository contract (keyed by username)
- The user service: save, existence check, credential validation,
  registration and password change
- Password hashing (bcrypt)
- SQLAlchemy persistence for users

Import persistence and CLI modules from their own subpackages.
"""

from safeplay_identity.application.services import UserService
from safeplay_identity.domain.user import (
    InvalidDisplayNameError,
    InvalidUsernameError,
    User,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    UserRepository,
    UserRole,
    Username,
)
from safeplay_identity.exceptions import (
    AuthError,
    InvalidCredentialsError,
    WeakPasswordError,
)
from safeplay_identity.services import PasswordHashingService

__all__ = [
    # Domain - User
    "InvalidDisplayNameError",
    "InvalidUsernameError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "Username",
    "UsernameAlreadyExistsError",
    # Exceptions
    "AuthError",
    "InvalidCredentialsError",
    "WeakPasswordError",
    # Services
    "PasswordHashingService",
    # Application Services
    "UserService",
]
