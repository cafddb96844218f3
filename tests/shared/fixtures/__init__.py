"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import async_engine, db_session
from tests.shared.fixtures.factories import TestUserFactory

__all__ = [
    "async_engine",
    "db_session",
    "TestUserFactory",
]
