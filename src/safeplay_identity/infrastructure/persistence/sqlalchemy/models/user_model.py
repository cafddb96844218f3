"""SQLAlchemy model for User aggregate."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from safeplay_identity.domain.user import DISPLAY_NAME_MAX_LENGTH, USERNAME_MAX_LENGTH
from safeplay_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)


class UserModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting User aggregates.

    The username is the primary key. Display names are indexed for lookup
    but deliberately not unique.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(USERNAME_MAX_LENGTH),
        primary_key=True,
    )
    display_name: Mapped[str] = mapped_column(
        String(DISPLAY_NAME_MAX_LENGTH),
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default="player", nullable=False)

    def __repr__(self) -> str:
        return (
            f"<UserModel(username={self.username}, "
            f"display_name={self.display_name}, role={self.role})>"
        )
