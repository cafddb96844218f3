"""User service: saving users, existence checks and credential validation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from safeplay_identity.domain.user import (
    InvalidUsernameError,
    User,
    Username,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    UserRole,
)
from safeplay_identity.exceptions import InvalidCredentialsError

if TYPE_CHECKING:
    from safeplay_identity.domain.user import UserRepository
    from safeplay_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)


class UserService:
    """
    Application service for SafePlay user accounts.

    Sits on top of the UserRepository and adds:
    - Registration with hashed passwords
    - Credential validation (login by username)
    - Password change

    Unknown usernames and wrong passwords are reported the same way
    (``None`` from ``validate_user``) so callers cannot tell them apart.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._dummy_hash: str | None = None

    async def save_user(self, user: User) -> User:
        return await self._user_repo.save(user)

    async def user_exists(self, username: str) -> bool:
        key = self._normalize(username)
        if key is None:
            return False
        return await self._user_repo.exists_by_username(key)

    async def find_user(self, username: str) -> User | None:
        key = self._normalize(username)
        if key is None:
            return None
        return await self._user_repo.find_by_username(key)

    async def validate_user(self, username: str, password: str) -> User | None:
        user = await self.find_user(username)

        if user is None:
            # Spend the same bcrypt work as a real check
            self._password_service.verify(password, self._get_dummy_hash())
            logger.debug("Login failed, no user with username: %s", username)
            return None

        if not self._password_service.verify(password, user.password_hash):
            logger.debug("Login failed, password mismatch for user: %s", username)
            return None

        # A password that was valid when set stays usable after policy changes
        if self._password_service.needs_rehash(user.password_hash):
            user.change_password_hash(self._password_service.rehash(password))
            await self._user_repo.save(user)
            logger.info("Password hash upgraded for user: %s", user.username)

        return user

    async def register_user(
        self,
        username: str,
        display_name: str,
        password: str,
        role: UserRole = UserRole.PLAYER,
    ) -> User:
        key = Username(username)
        if await self._user_repo.exists_by_username(key.value):
            raise UsernameAlreadyExistsError(key.value)

        password_hash = self._password_service.hash(password)
        user = User.create(
            username=key,
            display_name=display_name,
            password_hash=password_hash,
            role=role,
        )
        saved = await self._user_repo.save(user)

        logger.info("User registered: %s (role: %s)", saved.username, role.value)
        return saved

    async def change_password(
        self,
        username: str,
        current_password: str,
        new_password: str,
    ) -> None:
        user = await self.find_user(username)
        if user is None:
            raise UserNotFoundError(username)

        if not self._password_service.verify(current_password, user.password_hash):
            msg = "Current password is incorrect"
            raise InvalidCredentialsError(msg)

        user.change_password_hash(self._password_service.hash(new_password))
        await self._user_repo.save(user)

        logger.info("Password changed for user: %s", user.username)

    @staticmethod
    def _normalize(username: str) -> str | None:
        """Return the stored form of a username, or None if it can never exist."""
        try:
            return Username(username).value
        except InvalidUsernameError:
            return None

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_service.dummy_hash()
        return self._dummy_hash
