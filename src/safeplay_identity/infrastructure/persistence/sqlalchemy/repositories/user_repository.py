"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Union

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from safeplay_identity.domain.shared.time import ensure_tz_aware
from safeplay_identity.domain.user import (
    User,
    Username,
    UsernameAlreadyExistsError,
    UserRepository,
)
from safeplay_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Writes are flushed, not committed; the owner of the session decides
    when the unit of work ends.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, user: User) -> User:
        existing = await self._find_model_by_username(user.username)

        try:
            if existing:
                self._update_model(existing, user)
                logger.debug("Updated user: %s", user.username)
            else:
                model = self._map_to_model(user)
                self._session.add(model)
                logger.info("Created user: %s", user.username)

            await self._session.flush()
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise UsernameAlreadyExistsError(user.username) from e
            raise

        return user

    async def exists_by_username(self, username: Union[str, Username]) -> bool:
        stmt = select(func.count()).select_from(UserModel).where(
            UserModel.username == self._key(username),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def find_by_username(self, username: Union[str, Username]) -> User | None:
        model = await self._find_model_by_username(self._key(username))

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_display_name(self, display_name: str) -> User | None:
        stmt = (
            select(UserModel)
            .where(UserModel.display_name == display_name.strip())
            .order_by(UserModel.created_at, UserModel.username)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def list_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.created_at, UserModel.username)
        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    @staticmethod
    def _key(username: Union[str, Username]) -> str:
        if isinstance(username, Username):
            return username.value
        return Username(username).value

    async def _find_model_by_username(self, username: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.username == username)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            username=model.username,
            display_name=model.display_name,
            password_hash=model.password_hash,
            role=model.role,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            username=user.username,
            display_name=user.display_name,
            password_hash=user.password_hash,
            role=user.role.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.display_name = user.display_name
        model.password_hash = user.password_hash
        model.role = user.role.value
        model.updated_at = user.updated_at
