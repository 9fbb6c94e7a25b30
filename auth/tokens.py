"""
JWT creation and verification.

Tokens are HS256-signed JWTs (PyJWT) carrying the caller's claims plus
``iat`` / ``exp``.  They are stateless bearer credentials: nothing is
stored server-side and there is no revocation list.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from auth.errors import ExpiredTokenError, InvalidSignatureError, MalformedTokenError

DEFAULT_ALGORITHM = "HS256"


def create_token(
    claims: Dict[str, Any],
    secret: str,
    ttl_seconds: int,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    now: datetime | None = None,
) -> str:
    """Sign ``claims`` into a token that expires ``ttl_seconds`` after ``now``."""
    issued_at = now or datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iat"] = issued_at
    payload["exp"] = issued_at + timedelta(seconds=ttl_seconds)
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(
    token: str,
    secret: str,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
) -> Dict[str, Any]:
    """
    Verify ``token`` and return its claims.

    Raises ``ExpiredTokenError``, ``InvalidSignatureError`` or
    ``MalformedTokenError``.
    """
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise ExpiredTokenError() from exc
    except jwt.InvalidSignatureError as exc:
        raise InvalidSignatureError() from exc
    except jwt.InvalidTokenError as exc:
        raise MalformedTokenError() from exc
