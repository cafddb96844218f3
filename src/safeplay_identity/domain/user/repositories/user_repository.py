"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from safeplay_identity.domain.user.aggregates.user import User
from safeplay_identity.domain.user.value_objects.username import Username


class UserRepository(ABC):
    """Repository interface for User aggregates, keyed by username."""

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert the user or overwrite the whole record stored under its username."""

    @abstractmethod
    async def exists_by_username(self, username: Union[str, Username]) -> bool:
        """Check if a user exists with the given username.

        Usernames are normalized the way `Username` does; an invalid one
        raises InvalidUsernameError.
        """

    @abstractmethod
    async def find_by_username(
        self,
        username: Union[str, Username],
    ) -> Optional[User]:
        """Find a user by their (normalized) username."""

    @abstractmethod
    async def find_by_display_name(self, display_name: str) -> Optional[User]:
        """Find a user by display name.

        Display names are not unique. When several users share one, the
        oldest record wins (created_at, then username, ascending).
        """

    @abstractmethod
    async def count(self) -> int:
        """Count total users."""

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List all users, oldest first."""
