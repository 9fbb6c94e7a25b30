"""
Error taxonomy for the auth core.

Services raise these; the HTTP layer maps ``status_code`` and
``message`` onto a fixed JSON shape.  Messages are safe to show a
client: they never carry passwords, hashes or driver details.
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateEmailError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already registered"


class InvalidCredentialsError(AppError):
    """Unknown email and wrong password share this one error."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class StoreUnavailableError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


class TokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class ExpiredTokenError(TokenError):
    default_message = "Token expired"


class InvalidSignatureError(TokenError):
    default_message = "Invalid token signature"


class MalformedTokenError(TokenError):
    default_message = "Malformed token"
