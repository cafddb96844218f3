"""Unit tests for UserService."""

import logging
from unittest.mock import AsyncMock, Mock

import pytest

from safeplay_identity import (
    InvalidCredentialsError,
    InvalidUsernameError,
    PasswordHashingService,
    User,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    UserRole,
    WeakPasswordError,
)
from safeplay_identity.application.services import UserService

TEST_USERNAME = "alice"
TEST_DISPLAY_NAME = "Alice"
TEST_PASSWORD = "secure_password_123"
STORED_HASH = "$2b$04$storedhashstoredhashstoOq0mHq8d5ZWv3fV5yA0gQmL2p1n5yK"


def _user(password_hash: str = STORED_HASH) -> User:
    return User.create(TEST_USERNAME, TEST_DISPLAY_NAME, password_hash)


class _UserServiceTestBase:
    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.needs_rehash.return_value = False
        self.password_service.dummy_hash.return_value = "dummy_hash"

        self.service = UserService(
            user_repository=self.user_repo,
            password_service=self.password_service,
        )


class TestUserServicePassthrough(_UserServiceTestBase):
    """save_user and user_exists delegate to the repository unchanged."""

    @pytest.mark.asyncio
    async def test_save_user_delegates(self):
        user = _user()
        self.user_repo.save.return_value = user

        result = await self.service.save_user(user)

        assert result is user
        self.user_repo.save.assert_called_once_with(user)
        self.password_service.hash.assert_not_called()

    @pytest.mark.asyncio
    async def test_user_exists_true(self):
        self.user_repo.exists_by_username.return_value = True

        assert await self.service.user_exists(TEST_USERNAME) is True
        self.user_repo.exists_by_username.assert_called_once_with(TEST_USERNAME)

    @pytest.mark.asyncio
    async def test_user_exists_false(self):
        self.user_repo.exists_by_username.return_value = False

        assert await self.service.user_exists("nobody") is False

    @pytest.mark.asyncio
    async def test_save_user_propagates_persistence_errors(self):
        self.user_repo.save.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError, match="connection lost"):
            await self.service.save_user(_user())

    @pytest.mark.asyncio
    async def test_find_user(self):
        user = _user()
        self.user_repo.find_by_username.return_value = user

        assert await self.service.find_user(TEST_USERNAME) is user


class TestUserServiceUsernameNormalization(_UserServiceTestBase):
    """Usernames reach the repository in their stored (stripped) form."""

    @pytest.mark.asyncio
    async def test_user_exists_strips_username(self):
        self.user_repo.exists_by_username.return_value = True

        assert await self.service.user_exists("  alice ") is True
        self.user_repo.exists_by_username.assert_called_once_with(TEST_USERNAME)

    @pytest.mark.asyncio
    async def test_validate_user_strips_username(self):
        user = _user()
        self.user_repo.find_by_username.return_value = user
        self.password_service.verify.return_value = True

        assert await self.service.validate_user(" alice\t", TEST_PASSWORD) is user
        self.user_repo.find_by_username.assert_called_once_with(TEST_USERNAME)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username", ["", "   ", "two words", "x" * 51])
    async def test_invalid_username_is_absent(self, username):
        assert await self.service.user_exists(username) is False
        assert await self.service.find_user(username) is None
        assert await self.service.validate_user(username, TEST_PASSWORD) is None

        self.user_repo.exists_by_username.assert_not_called()
        self.user_repo.find_by_username.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_username_still_runs_a_verification(self):
        await self.service.validate_user("two words", TEST_PASSWORD)

        self.password_service.verify.assert_called_once_with(
            TEST_PASSWORD, "dummy_hash"
        )

    @pytest.mark.asyncio
    async def test_register_checks_the_stripped_username(self):
        self.user_repo.exists_by_username.return_value = True

        with pytest.raises(UsernameAlreadyExistsError) as exc_info:
            await self.service.register_user(" alice ", "Mallory", TEST_PASSWORD)

        assert exc_info.value.username == TEST_USERNAME
        self.user_repo.exists_by_username.assert_called_once_with(TEST_USERNAME)
        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_rejects_invalid_username(self):
        with pytest.raises(InvalidUsernameError):
            await self.service.register_user("two words", "Two", TEST_PASSWORD)

        self.user_repo.save.assert_not_called()
        self.password_service.hash.assert_not_called()

    @pytest.mark.asyncio
    async def test_change_password_invalid_username(self):
        with pytest.raises(UserNotFoundError):
            await self.service.change_password("", TEST_PASSWORD, "new-password-1")


class TestUserServiceValidate(_UserServiceTestBase):
    """Credential validation."""

    @pytest.mark.asyncio
    async def test_valid_credentials_return_user(self):
        user = _user()
        self.user_repo.find_by_username.return_value = user
        self.password_service.verify.return_value = True

        result = await self.service.validate_user(TEST_USERNAME, TEST_PASSWORD)

        assert result is user
        self.user_repo.find_by_username.assert_called_once_with(TEST_USERNAME)
        self.password_service.verify.assert_called_once_with(
            TEST_PASSWORD, STORED_HASH
        )

    @pytest.mark.asyncio
    async def test_looks_up_by_username_not_display_name(self):
        self.user_repo.find_by_username.return_value = None
        self.password_service.verify.return_value = False

        await self.service.validate_user(TEST_USERNAME, TEST_PASSWORD)

        self.user_repo.find_by_username.assert_called_once_with(TEST_USERNAME)
        self.user_repo.find_by_display_name.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_password_returns_none(self):
        self.user_repo.find_by_username.return_value = _user()
        self.password_service.verify.return_value = False

        result = await self.service.validate_user(TEST_USERNAME, "wrong")

        assert result is None
        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_user_returns_none(self):
        self.user_repo.find_by_username.return_value = None

        result = await self.service.validate_user("bob", TEST_PASSWORD)

        assert result is None

    @pytest.mark.asyncio
    async def test_unknown_user_still_runs_a_verification(self):
        """Unknown usernames cost one bcrypt check, like a wrong password."""
        self.user_repo.find_by_username.return_value = None

        await self.service.validate_user("bob", TEST_PASSWORD)

        self.password_service.verify.assert_called_once_with(
            TEST_PASSWORD, "dummy_hash"
        )

    @pytest.mark.asyncio
    async def test_dummy_hash_is_computed_once(self):
        self.user_repo.find_by_username.return_value = None

        await self.service.validate_user("bob", TEST_PASSWORD)
        await self.service.validate_user("carol", TEST_PASSWORD)

        self.password_service.dummy_hash.assert_called_once()

    @pytest.mark.asyncio
    async def test_unknown_user_result_is_ignored_even_if_truthy(self):
        self.user_repo.find_by_username.return_value = None
        self.password_service.verify.return_value = True

        assert await self.service.validate_user("bob", TEST_PASSWORD) is None

    @pytest.mark.asyncio
    async def test_rehashes_outdated_hash_on_success(self):
        user = _user()
        self.user_repo.find_by_username.return_value = user
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = True
        self.password_service.rehash.return_value = "upgraded_hash"

        result = await self.service.validate_user(TEST_USERNAME, TEST_PASSWORD)

        assert result is user
        assert user.password_hash == "upgraded_hash"
        self.password_service.rehash.assert_called_once_with(TEST_PASSWORD)
        self.password_service.hash.assert_not_called()
        self.user_repo.save.assert_called_once_with(user)

    @pytest.mark.asyncio
    async def test_never_logs_passwords_or_hashes(self, caplog):
        self.user_repo.find_by_username.return_value = _user()
        self.password_service.verify.return_value = False

        with caplog.at_level(logging.DEBUG, logger="safeplay_identity"):
            await self.service.validate_user(TEST_USERNAME, TEST_PASSWORD)
            self.user_repo.find_by_username.return_value = None
            await self.service.validate_user("bob", TEST_PASSWORD)

        assert caplog.records
        for record in caplog.records:
            message = record.getMessage()
            assert TEST_PASSWORD not in message
            assert STORED_HASH not in message


class TestUserServiceRegister(_UserServiceTestBase):
    """Registration."""

    @pytest.mark.asyncio
    async def test_register_hashes_and_saves(self):
        self.user_repo.exists_by_username.return_value = False
        self.password_service.hash.return_value = "hashed_password"
        self.user_repo.save.side_effect = lambda user: user

        user = await self.service.register_user(
            username=TEST_USERNAME,
            display_name=TEST_DISPLAY_NAME,
            password=TEST_PASSWORD,
        )

        assert user.username == TEST_USERNAME
        assert user.display_name == TEST_DISPLAY_NAME
        assert user.password_hash == "hashed_password"
        assert user.role == UserRole.PLAYER
        self.password_service.hash.assert_called_once_with(TEST_PASSWORD)
        self.user_repo.save.assert_called_once()

    @pytest.mark.asyncio
    async def test_register_with_role(self):
        self.user_repo.exists_by_username.return_value = False
        self.password_service.hash.return_value = "hashed_password"
        self.user_repo.save.side_effect = lambda user: user

        user = await self.service.register_user(
            "coach", "Coach", TEST_PASSWORD, role=UserRole.SUPERVISOR
        )

        assert user.is_supervisor is True

    @pytest.mark.asyncio
    async def test_register_raises_when_username_taken(self):
        self.user_repo.exists_by_username.return_value = True

        with pytest.raises(UsernameAlreadyExistsError) as exc_info:
            await self.service.register_user(
                TEST_USERNAME, TEST_DISPLAY_NAME, TEST_PASSWORD
            )

        assert exc_info.value.username == TEST_USERNAME
        self.user_repo.save.assert_not_called()
        self.password_service.hash.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_raises_for_weak_password(self):
        self.user_repo.exists_by_username.return_value = False
        self.password_service.hash.side_effect = WeakPasswordError("Too short")

        with pytest.raises(WeakPasswordError):
            await self.service.register_user(TEST_USERNAME, TEST_DISPLAY_NAME, "short")

        self.user_repo.save.assert_not_called()


class TestUserServiceChangePassword(_UserServiceTestBase):
    """Password change."""

    @pytest.mark.asyncio
    async def test_change_password(self):
        user = _user()
        self.user_repo.find_by_username.return_value = user
        self.password_service.verify.return_value = True
        self.password_service.hash.return_value = "new_hash"

        await self.service.change_password(TEST_USERNAME, TEST_PASSWORD, "new_password_1")

        assert user.password_hash == "new_hash"
        self.password_service.hash.assert_called_once_with("new_password_1")
        self.user_repo.save.assert_called_once_with(user)

    @pytest.mark.asyncio
    async def test_change_password_unknown_user(self):
        self.user_repo.find_by_username.return_value = None

        with pytest.raises(UserNotFoundError):
            await self.service.change_password("nobody", TEST_PASSWORD, "new_password_1")

    @pytest.mark.asyncio
    async def test_change_password_wrong_current(self):
        self.user_repo.find_by_username.return_value = _user()
        self.password_service.verify.return_value = False

        with pytest.raises(InvalidCredentialsError, match="Current password"):
            await self.service.change_password(TEST_USERNAME, "wrong", "new_password_1")

        self.user_repo.save.assert_not_called()
