"""
Auth API routes — register, login.

Mounted at the application root: ``POST /register``, ``POST /login``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from auth.dependencies import get_auth_service
from auth.errors import AppError
from auth.schemas import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from auth.service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _log_failure(action: str, exc: AppError) -> None:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s failed: %s", action, exc.__class__.__name__)
    else:
        logger.info("%s rejected: %s", action, exc.message)


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Register a new user."""
    try:
        user = await service.register(req.username, req.email, req.password)
    except AppError as exc:
        _log_failure("Registration", exc)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    return RegisterResponse(message="Registration successful", data=user)


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Login with email + password."""
    try:
        result = await service.login(req.email, req.password)
    except AppError as exc:
        _log_failure("Login", exc)
        return JSONResponse(
            status_code=exc.status_code,
            content=LoginResponse(message=exc.message).model_dump(),
        )
    except Exception:
        # Keep the null-field shape for callers even on unexpected failures.
        logger.exception("Error logging in user")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=LoginResponse(message="Internal server error").model_dump(),
        )

    return LoginResponse(
        message="Login successful",
        username=result.username,
        email=result.email,
        token=result.token,
    )
