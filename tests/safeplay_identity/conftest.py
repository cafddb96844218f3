"""
Pytest configuration for safeplay_identity tests.

This conftest provides fixtures specific to the identity domain
(users, credentials) and re-exports the shared database fixtures.
"""

import pytest

from safeplay_identity import PasswordHashingService, User
from tests.shared.fixtures.database import async_engine, db_session
from tests.shared.fixtures.factories import TestUserFactory

__all__ = [
    "async_engine",
    "db_session",
]


@pytest.fixture
def alice() -> User:
    """Standard player whose display name equals the username."""
    return TestUserFactory.alice()


@pytest.fixture
def bob() -> User:
    """Player with a display name different from the username."""
    return TestUserFactory.bob()


@pytest.fixture
def supervisor() -> User:
    """Supervisor test user."""
    return TestUserFactory.supervisor()


@pytest.fixture
def password_service() -> PasswordHashingService:
    """Real bcrypt service with the cheapest work factor."""
    return TestUserFactory.password_service()
