"""
Access token creation and verification (PyJWT).

Tokens are HS256 JWTs carrying ``sub`` (user id), ``email``, ``iat`` and
``exp``.  Secret and lifetime come from ``config.jwt_secret`` and
``config.jwt_expiry_seconds`` (env vars: ``JWT_SECRET``, ``JWT_EXPIRY_SECONDS``).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from config.settings import config
from utils.exceptions import InvalidTokenError


def create_token(
    user_id: int,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed token for ``user_id`` expiring after the configured lifetime."""
    if expires_delta is None:
        expires_delta = timedelta(seconds=config.jwt_expiry_seconds)

    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def verify_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry, returning the decoded claims.

    Raises ``InvalidTokenError`` on malformed, tampered or expired tokens.
    """
    try:
        return jwt.decode(
            token,
            config.jwt_secret,
            algorithms=[config.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token has expired") from exc
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(f"Invalid token: {exc}") from exc
