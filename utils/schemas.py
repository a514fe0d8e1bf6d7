"""
Pydantic schemas for the user accounts API.

JSON bodies use camelCase (``coinBalance``, ``firstName``); the snake_case
field names are accepted on input as well.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


class ProfileFields(CamelModel):
    first_name: Optional[str] = Field(default=None, max_length=128)
    last_name: Optional[str] = Field(default=None, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=32)
    address: Optional[str] = Field(default=None, max_length=255)
    cin: Optional[str] = None


class RegisterRequest(ProfileFields):
    """Body of ``POST /auth/register``.

    Length and CIN rules are enforced by the service so that the error
    messages stay in one place; only presence and types are checked here.
    """

    email: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., max_length=128)


class UserCreate(RegisterRequest):
    """Body of ``POST /users`` — registration fields plus a starting balance."""

    coin_balance: Optional[int] = None


class UserUpdate(CamelModel):
    """Patch body for ``PATCH /users/{id}``.

    Every field is optional; only the keys present in the request are
    applied (see :meth:`changes`).
    """

    email: Optional[str] = Field(default=None, min_length=1, max_length=255)
    username: Optional[str] = Field(default=None, min_length=1, max_length=64)
    password: Optional[str] = Field(default=None, max_length=128)
    first_name: Optional[str] = Field(default=None, max_length=128)
    last_name: Optional[str] = Field(default=None, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=32)
    address: Optional[str] = Field(default=None, max_length=255)
    cin: Optional[str] = None
    coin_balance: Optional[int] = None

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly sent by the client, keyed by column name."""
        return self.model_dump(exclude_unset=True)


class LoginRequest(CamelModel):
    email: str
    password: str


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class UserPublic(CamelModel):
    """Outward view of a user. Has no password field by construction."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    email: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    cin: Optional[str] = None
    coin_balance: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginResponse(CamelModel):
    access_token: str
    user: UserPublic
