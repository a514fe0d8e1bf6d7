"""
UserStore — every read and write against the ``users`` table.

Rows are returned as ORM objects; callers project them through
``UserPublic`` before anything leaves the process, so the password hash
only ever reaches the auth service.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User
from utils.exceptions import UniquenessError, UserNotFoundError
from utils.validators import validate_cin

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "Email already in use"
USERNAME_IN_USE = "Username already in use"

_WRITABLE_FIELDS = frozenset(
    {
        "email",
        "username",
        "password",
        "first_name",
        "last_name",
        "phone",
        "address",
        "cin",
        "coin_balance",
    }
)


class UserStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    # ── Lookups ────────────────────────────────────────────────────────

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def find_all(self) -> List[User]:
        result = await self.session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    # ── Writes ─────────────────────────────────────────────────────────

    async def create(self, fields: Dict[str, Any]) -> User:
        """
        Insert a user.  ``fields["password"]`` must already be hashed.

        Raises ``ValidationError`` for a malformed CIN and
        ``UniquenessError`` when the email or username is taken.
        """
        data = _writable(fields)
        validate_cin(data.get("cin"))
        if data.get("coin_balance") is None:
            data["coin_balance"] = 0

        await self._ensure_unique(data.get("email"), data.get("username"))

        user = User(**data)
        self.session.add(user)
        await self._flush_unique()
        logger.debug("Inserted user %s", user.id)
        return user

    async def update(self, user_id: int, changes: Dict[str, Any]) -> User:
        """Apply only the keys present in ``changes``."""
        user = await self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        data = _writable(changes)
        if "cin" in data:
            validate_cin(data["cin"])
        await self._ensure_unique(
            data.get("email"), data.get("username"), exclude_id=user.id
        )

        for name, value in data.items():
            setattr(user, name, value)
        await self._flush_unique()
        await self.session.refresh(user)
        return user

    async def delete(self, user_id: int) -> User:
        """Delete and return the row; raises ``UserNotFoundError`` if absent."""
        user = await self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        # rowcount 0 means another request removed the row after the lookup.
        result = await self.session.execute(
            delete(User)
            .where(User.id == user_id)
            .execution_options(synchronize_session=False)
        )
        self.session.expunge(user)
        if result.rowcount == 0:
            raise UserNotFoundError(user_id)
        return user

    # ── Internals ──────────────────────────────────────────────────────

    async def _ensure_unique(
        self,
        email: Optional[str],
        username: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> None:
        if email is not None:
            existing = await self.find_by_email(email)
            if existing is not None and existing.id != exclude_id:
                raise UniquenessError("email", EMAIL_IN_USE)
        if username is not None:
            existing = await self.find_by_username(username)
            if existing is not None and existing.id != exclude_id:
                raise UniquenessError("username", USERNAME_IN_USE)

    async def _flush_unique(self) -> None:
        # The unique indexes are the real guard when two writers race past
        # the lookups above.
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            detail = str(exc.orig).lower()
            if "unique" not in detail and "duplicate" not in detail:
                raise
            field = "username" if "username" in detail else "email"
            message = USERNAME_IN_USE if field == "username" else EMAIL_IN_USE
            logger.warning("Unique constraint hit on users.%s", field)
            raise UniquenessError(field, message) from exc


def _writable(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k in _WRITABLE_FIELDS}
