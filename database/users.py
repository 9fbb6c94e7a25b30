"""
Credential store — persistence of ``User`` rows.

Every call is bounded by ``settings.db_timeout_seconds``.  Email
uniqueness is owned by the table's UNIQUE constraint, so a concurrent
duplicate insert that slips past the service's pre-check still ends up
as ``DuplicateEmailError``.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Awaitable, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import DuplicateEmailError, StoreUnavailableError
from config.settings import Settings
from database.models import User

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UserRepository:
    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        self.session = session
        self.timeout = settings.db_timeout_seconds

    async def _bounded(self, op: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            logger.error("Store call %s timed out after %.1fs", op, self.timeout)
            raise StoreUnavailableError() from exc
        except IntegrityError:
            raise
        except SQLAlchemyError as exc:
            logger.error("Store call %s failed: %s", op, exc.__class__.__name__)
            raise StoreUnavailableError() from exc

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._bounded(
            "find_by_email",
            self.session.execute(select(User).where(User.email == email)),
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        result = await self._bounded(
            "find_by_id",
            self.session.execute(select(User).where(User.id == user_id)),
        )
        return result.scalar_one_or_none()

    async def insert(self, username: str, email: str, password_hash: str) -> User:
        """Persist a new user; the database assigns ``id``."""
        user = User(username=username, email=email, password_hash=password_hash)
        self.session.add(user)
        try:
            await self._bounded("insert", self.session.commit())
        except IntegrityError as exc:
            await self._bounded("rollback", self.session.rollback())
            raise DuplicateEmailError() from exc
        except StoreUnavailableError:
            # The commit failure is what the caller sees; a failed rollback is only logged.
            with contextlib.suppress(StoreUnavailableError):
                await self._bounded("rollback", self.session.rollback())
            raise
        return user
