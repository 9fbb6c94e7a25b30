"""
Tests for UserRepository — constraint mapping and store timeouts,
with the SQLAlchemy session mocked out.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError

from auth.errors import DuplicateEmailError, StoreUnavailableError
from config.settings import Settings
from database.models import User
from database.users import UserRepository


def _session(found=None) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = found
    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def repo_settings() -> Settings:
    return Settings(db_timeout_seconds=0.05)


class TestFind:
    @pytest.mark.asyncio
    async def test_find_by_email_returns_row(self, repo_settings):
        alice = User(id=3, username="alice", email="a@x.com", password_hash="h")
        repo = UserRepository(_session(found=alice), repo_settings)
        assert await repo.find_by_email("a@x.com") is alice

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, repo_settings):
        repo = UserRepository(_session(found=None), repo_settings)
        assert await repo.find_by_id(42) is None

    @pytest.mark.asyncio
    async def test_slow_store_times_out(self, repo_settings):
        session = _session()

        async def _hang(*args, **kwargs):
            await asyncio.sleep(1)

        session.execute = _hang
        repo = UserRepository(session, repo_settings)
        with pytest.raises(StoreUnavailableError):
            await repo.find_by_email("a@x.com")

    @pytest.mark.asyncio
    async def test_driver_error_becomes_store_unavailable(self, repo_settings):
        session = _session()
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )
        repo = UserRepository(session, repo_settings)
        with pytest.raises(StoreUnavailableError) as exc_info:
            await repo.find_by_email("a@x.com")
        assert "connection refused" not in exc_info.value.message


class TestInsert:
    @pytest.mark.asyncio
    async def test_insert_adds_and_commits(self, repo_settings):
        session = _session()
        repo = UserRepository(session, repo_settings)

        user = await repo.insert("alice", "a@x.com", "hashed")

        session.add.assert_called_once_with(user)
        session.commit.assert_awaited_once()
        assert (user.username, user.email, user.password_hash) == ("alice", "a@x.com", "hashed")

    @pytest.mark.asyncio
    async def test_unique_violation_becomes_duplicate_email(self, repo_settings):
        session = _session()
        session.commit = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("duplicate key value"))
        )
        repo = UserRepository(session, repo_settings)

        with pytest.raises(DuplicateEmailError):
            await repo.insert("alice", "a@x.com", "hashed")
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_failure_rolls_back(self, repo_settings):
        session = _session()
        session.commit = AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("gone")))
        repo = UserRepository(session, repo_settings)

        with pytest.raises(StoreUnavailableError):
            await repo.insert("alice", "a@x.com", "hashed")
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stuck_rollback_is_bounded(self, repo_settings):
        session = _session()

        async def _hang(*args, **kwargs):
            await asyncio.sleep(1)

        session.commit = _hang
        session.rollback = _hang
        repo = UserRepository(session, repo_settings)

        loop = asyncio.get_running_loop()
        started = loop.time()
        with pytest.raises(StoreUnavailableError):
            await repo.insert("alice", "a@x.com", "hashed")
        assert loop.time() - started < 0.5


class TestUserModel:
    def test_email_is_unique_at_the_table_level(self):
        assert User.__table__.c.email.unique is True

    def test_id_is_store_assigned(self):
        column = User.__table__.c.id
        assert column.primary_key
        assert column.autoincrement is True

    def test_public_fields_exclude_hash(self):
        user = User(id=1, username="alice", email="a@x.com", password_hash="h")
        assert user.to_public() == {"id": 1, "username": "alice", "email": "a@x.com"}
