"""
User management routes.

Route prefix: /users
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from api.dependencies import get_auth_service, get_current_user_id, get_user_store
from auth.service import AuthService
from database.user_store import UserStore
from utils.exceptions import UserNotFoundError
from utils.schemas import UserCreate, UserPublic, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.get("", response_model=List[UserPublic])
async def list_users(
    store: UserStore = Depends(get_user_store),
    _auth_user_id: int = Depends(get_current_user_id),
) -> List[UserPublic]:
    users = await store.find_all()
    return [UserPublic.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(
    user_id: int,
    store: UserStore = Depends(get_user_store),
    _auth_user_id: int = Depends(get_current_user_id),
) -> UserPublic:
    user = await store.find_by_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return UserPublic.model_validate(user)


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def create_user(
    req: UserCreate,
    service: AuthService = Depends(get_auth_service),
) -> UserPublic:
    """Public endpoint: same rules as registration, plus an optional starting balance."""
    return await service.register(req)


@router.patch("/{user_id}", response_model=UserPublic)
async def update_user(
    user_id: int,
    req: UserUpdate,
    service: AuthService = Depends(get_auth_service),
    _auth_user_id: int = Depends(get_current_user_id),
) -> UserPublic:
    return await service.update_user(user_id, req)


@router.delete("/{user_id}", response_model=UserPublic)
async def delete_user(
    user_id: int,
    store: UserStore = Depends(get_user_store),
    auth_user_id: int = Depends(get_current_user_id),
) -> UserPublic:
    user = await store.delete(user_id)
    logger.info("User %s deleted by %s", user_id, auth_user_id)
    return UserPublic.model_validate(user)
