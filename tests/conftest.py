"""Shared fixtures: test settings, an in-memory credential store, and a wired app."""

from __future__ import annotations

from typing import Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from auth.dependencies import get_user_repository
from auth.errors import DuplicateEmailError
from api.dependencies import get_funfact_llm
from config.settings import Settings
from database.models import User

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


class InMemoryUserRepository:
    """Stand-in for ``UserRepository`` with the same unique-email rule."""

    def __init__(self) -> None:
        self.rows: Dict[int, User] = {}
        self._next_id = 1

    async def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.rows.values() if u.email == email), None)

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return self.rows.get(user_id)

    async def insert(self, username: str, email: str, password_hash: str) -> User:
        if any(u.email == email for u in self.rows.values()):
            raise DuplicateEmailError()
        user = User(id=self._next_id, username=username, email=email, password_hash=password_hash)
        self.rows[user.id] = user
        self._next_id += 1
        return user


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        db_auto_create=False,
        openai_api_key="sk-test",
    )


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def fake_llm() -> MagicMock:
    llm = MagicMock()
    llm.generate = AsyncMock(return_value="1. Indonesia produces a lot of plastic waste.")
    return llm


@pytest.fixture
def app(settings, user_repo, fake_llm):
    from main import create_app

    application = create_app(settings)
    application.dependency_overrides[get_user_repository] = lambda: user_repo
    application.dependency_overrides[get_funfact_llm] = lambda: fake_llm
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
