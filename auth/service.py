"""
AuthService — registration, login and credential-aware updates.

Constructed per request from a ``UserStore``; see
``api.dependencies.get_auth_service``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict

from pydantic.alias_generators import to_camel

from auth.password import hash_password, verify_password
from auth.tokens import create_token
from database.user_store import EMAIL_IN_USE, USERNAME_IN_USE, UserStore
from utils.exceptions import (
    AuthenticationError,
    UniquenessError,
    UserNotFoundError,
    ValidationError,
)
from utils.schemas import LoginResponse, RegisterRequest, UserPublic, UserUpdate
from utils.validators import validate_cin, validate_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"

# Columns that may be omitted from a patch but never set to null.
_NON_NULLABLE = ("email", "username", "password", "coin_balance")


class AuthService:
    def __init__(
        self,
        store: UserStore,
        token_issuer: Callable[[int, str], str] = create_token,
    ):
        self.store = store
        self.token_issuer = token_issuer

    async def register(self, data: RegisterRequest) -> UserPublic:
        """
        Create an account.  Checks run in a fixed order and the first
        failure wins: email, username, password length, CIN.

        ``data`` may be a ``UserCreate`` carrying a starting ``coin_balance``;
        plain registrations start at 0.
        """
        if await self.store.find_by_email(data.email) is not None:
            raise UniquenessError("email", EMAIL_IN_USE)
        if await self.store.find_by_username(data.username) is not None:
            raise UniquenessError("username", USERNAME_IN_USE)
        validate_password(data.password)
        validate_cin(data.cin)

        fields = data.model_dump()
        fields["password"] = await asyncio.to_thread(hash_password, data.password)
        if fields.get("coin_balance") is None:
            fields["coin_balance"] = 0

        user = await self.store.create(fields)
        logger.info("Registered user %s (%s)", user.username, user.id)
        return UserPublic.model_validate(user)

    async def login(self, email: str, password: str) -> LoginResponse:
        """Verify credentials and issue an access token.

        Unknown email and wrong password produce the same error so the
        response does not reveal whether an account exists.
        """
        user = await self.store.find_by_email(email)
        if user is None:
            logger.info("Login failed: unknown email")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not await asyncio.to_thread(verify_password, password, user.password):
            logger.info("Login failed: bad password for user %s", user.id)
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = self.token_issuer(user.id, user.email)
        logger.info("Login: %s (%s)", user.username, user.id)
        return LoginResponse(access_token=token, user=UserPublic.model_validate(user))

    async def update_user(self, user_id: int, patch: UserUpdate) -> UserPublic:
        # Looked up here as well as in the store so a missing id is a 404
        # before any patch validation or password hashing.
        if await self.store.find_by_id(user_id) is None:
            raise UserNotFoundError(user_id)

        changes: Dict[str, Any] = patch.changes()
        for name in _NON_NULLABLE:
            if name in changes and changes[name] is None:
                raise ValidationError(f"{to_camel(name)} cannot be null")

        if "password" in changes:
            validate_password(changes["password"])
            changes["password"] = await asyncio.to_thread(
                hash_password, changes["password"]
            )

        user = await self.store.update(user_id, changes)
        logger.info("Updated user %s (%s)", user.id, ", ".join(sorted(changes)) or "no fields")
        return UserPublic.model_validate(user)
