"""SQLAlchemy implementation for safeplay_identity persistence.

Provides:
- Base: Declarative base for identity models
- UserModel: SQLAlchemy model for users
- UserRepositorySQLAlchemy: Repository implementation for users
- Engine/session helpers and schema creation
"""

from safeplay_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)
from safeplay_identity.infrastructure.persistence.sqlalchemy.database import (
    create_tables,
    dispose_engine,
    get_engine,
    get_session_maker,
    session_scope,
)
from safeplay_identity.infrastructure.persistence.sqlalchemy.models import UserModel
from safeplay_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "create_tables",
    "dispose_engine",
    "get_engine",
    "get_session_maker",
    "session_scope",
]
