"""User aggregate: login identity, display name and credential hash."""

from datetime import datetime
from typing import Union

from safeplay_identity.domain.shared.time import utc_now
from safeplay_identity.domain.user.exceptions import InvalidDisplayNameError
from safeplay_identity.domain.user.value_objects import UserRole, Username

DISPLAY_NAME_MAX_LENGTH = 100


def _validate_display_name(display_name: str) -> str:
    normalized = (display_name or "").strip()
    if not normalized:
        msg = "Display name cannot be empty"
        raise InvalidDisplayNameError(msg)
    if len(normalized) > DISPLAY_NAME_MAX_LENGTH:
        msg = f"Display name cannot exceed {DISPLAY_NAME_MAX_LENGTH} characters"
        raise InvalidDisplayNameError(msg)
    return normalized


class User:
    """
    User aggregate root.

    Identified by its username. The display name is free text and may be
    shared by several users. Only a one-way password hash is held; the
    plaintext password never reaches this object.
    """

    def __init__(  # noqa: PLR0913
        self,
        username: Union[str, Username],
        display_name: str,
        password_hash: str,
        role: Union[str, UserRole] = UserRole.PLAYER,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._username = (
            username if isinstance(username, Username) else Username(username)
        )
        self._display_name = _validate_display_name(display_name)
        self._password_hash = password_hash
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @property
    def username(self) -> str:
        return self._username.value

    @property
    def username_obj(self) -> Username:
        return self._username

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_supervisor(self) -> bool:
        return self._role == UserRole.SUPERVISOR

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._updated_at = utc_now()

    def rename(self, display_name: str) -> None:
        self._display_name = _validate_display_name(display_name)
        self._updated_at = utc_now()

    def promote_to_supervisor(self) -> None:
        self._role = UserRole.SUPERVISOR
        self._updated_at = utc_now()

    def demote_to_player(self) -> None:
        self._role = UserRole.PLAYER
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        username: Union[str, Username],
        display_name: str,
        password_hash: str,
        role: UserRole = UserRole.PLAYER,
    ) -> "User":
        return cls(
            username=username,
            display_name=display_name,
            password_hash=password_hash,
            role=role,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        username: Union[str, Username],
        display_name: str,
        password_hash: str,
        role: Union[str, UserRole],
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            username=username,
            display_name=display_name,
            password_hash=password_hash,
            role=role,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._username == other._username

    def __hash__(self) -> int:
        return hash(self._username)

    def __repr__(self) -> str:
        return (
            f"User(username={self._username.value}, "
            f"display_name={self._display_name!r}, role={self._role.value})"
        )
