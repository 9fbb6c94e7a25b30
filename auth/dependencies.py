"""
FastAPI dependencies for authentication.

Provides ``get_settings``, ``get_user_repository``, ``get_auth_service``
and ``get_current_claims``.  Settings come from ``app.state`` so the
whole dependency chain runs off the object handed to ``create_app``.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import TokenError
from auth.service import AuthService
from auth.tokens import verify_token
from config.settings import Settings
from database.session import get_db_session
from database.users import UserRepository

_bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> UserRepository:
    return UserRepository(session, settings)


async def get_auth_service(
    repository: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(repository, settings)


async def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Extract and verify the Bearer token, returning its claims
    (``id``, ``username``, ``iat``, ``exp``).
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return verify_token(
            credentials.credentials,
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
    except TokenError as exc:
        raise HTTPException(
            status_code=exc.status_code,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
