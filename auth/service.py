"""
Auth service — registration and login business logic.

No HTTP here: the service raises ``auth.errors`` exceptions and the
routers turn them into responses.  Nothing is cached between calls;
every operation re-reads the credential store.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Optional

from auth.errors import DuplicateEmailError, InvalidCredentialsError, ValidationError
from auth.password import hash_password, verify_password
from auth.schemas import LoginResult, PublicUser
from auth.tokens import create_token
from config.settings import Settings
from database.users import UserRepository

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_USERNAME_MAX = 64
_EMAIL_MAX = 255
_BCRYPT_MAX_BYTES = 72


class AuthService:
    def __init__(self, repository: UserRepository, settings: Settings) -> None:
        self.repository = repository
        self.settings = settings

    # ── Register ──────────────────────────────────────────────────────

    async def register(
        self,
        username: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> PublicUser:
        """
        Create an account and return its public fields.

        Raises ``ValidationError``, ``DuplicateEmailError`` or
        ``StoreUnavailableError``.
        """
        username, email = self._validate_registration(username, email, password)

        if await self.repository.find_by_email(email) is not None:
            raise DuplicateEmailError()

        password_hash = await asyncio.to_thread(
            hash_password, password, self.settings.bcrypt_rounds
        )
        user = await self.repository.insert(username, email, password_hash)
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return PublicUser(**user.to_public())

    def _validate_registration(
        self,
        username: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> tuple[str, str]:
        username = (username or "").strip()
        email = (email or "").strip()

        if not username or not email or not password:
            raise ValidationError("Username, email and password are required")
        if len(username) > _USERNAME_MAX:
            raise ValidationError(f"Username must be at most {_USERNAME_MAX} characters")
        if len(email) > _EMAIL_MAX or not _EMAIL_RE.match(email):
            raise ValidationError("Email address is not valid")
        if len(password) < self.settings.password_min_length:
            raise ValidationError(
                f"Password must be at least {self.settings.password_min_length} characters"
            )
        if len(password.encode()) > _BCRYPT_MAX_BYTES:
            raise ValidationError(f"Password must be at most {_BCRYPT_MAX_BYTES} bytes")
        return username, email

    # ── Login ─────────────────────────────────────────────────────────

    async def login(self, email: Optional[str], password: Optional[str]) -> LoginResult:
        """
        Check credentials and issue a bearer token.

        Unknown email and wrong password both raise
        ``InvalidCredentialsError`` with the same message.
        """
        email = (email or "").strip()
        if not email or not password:
            raise InvalidCredentialsError()

        user = await self.repository.find_by_email(email)
        if user is None:
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(verify_password, password, user.password_hash)
        if not matches:
            raise InvalidCredentialsError()

        token = create_token(
            {"id": user.id, "username": user.username},
            self.settings.jwt_secret,
            self.settings.jwt_expiry_seconds,
            algorithm=self.settings.jwt_algorithm,
        )
        logger.info("Login: %s (id=%s)", user.username, user.id)
        return LoginResult(username=user.username, email=user.email, token=token)
