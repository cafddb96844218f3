"""Username value object.

Usernames are the primary key of the user store and the login identifier.
"""

import re
from dataclasses import dataclass

from safeplay_identity.domain.user.exceptions import InvalidUsernameError

USERNAME_MAX_LENGTH = 50

# No whitespace inside a username; surrounding whitespace is trimmed first
USERNAME_PATTERN = re.compile(r"^\S+$")


@dataclass(frozen=True)
class Username:
    """Value object representing a validated username."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            msg = f"Username must be a string, got {type(self.value).__name__}"
            raise InvalidUsernameError(msg)

        normalized = self.value.strip()

        if not normalized:
            msg = "Username cannot be empty"
            raise InvalidUsernameError(msg)

        if len(normalized) > USERNAME_MAX_LENGTH:
            msg = f"Username cannot exceed {USERNAME_MAX_LENGTH} characters"
            raise InvalidUsernameError(msg)

        if not USERNAME_PATTERN.match(normalized):
            msg = f"Username cannot contain whitespace: {normalized!r}"
            raise InvalidUsernameError(msg)

        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Username('{self.value}')"
