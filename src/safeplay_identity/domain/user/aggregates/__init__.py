from safeplay_identity.domain.user.aggregates.user import (
    DISPLAY_NAME_MAX_LENGTH,
    User,
)

__all__ = ["DISPLAY_NAME_MAX_LENGTH", "User"]
