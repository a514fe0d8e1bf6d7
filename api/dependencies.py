"""
FastAPI dependencies (shared across routes).

This is the composition root: each request gets its own
session → ``UserStore`` → ``AuthService`` chain.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.service import AuthService
from auth.tokens import verify_token
from database.session import get_db_session
from database.user_store import UserStore
from utils.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401 here rather than the
# framework's default response.
_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Re-export so routes import from a single place."""
    yield session


def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return UserStore(session)


def get_auth_service(store: UserStore = Depends(get_user_store)) -> AuthService:
    return AuthService(store)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> int:
    """
    Extract and verify the Bearer token, returning the authenticated
    user id (the token's ``sub`` claim).
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Missing Bearer token")

    try:
        claims = verify_token(credentials.credentials)
    except InvalidTokenError as exc:
        logger.debug("Rejected bearer token: %s", exc.message)
        raise _unauthorized("Invalid or expired token") from exc

    try:
        return int(claims["sub"])
    except (TypeError, ValueError) as exc:
        raise _unauthorized("Invalid or expired token") from exc
