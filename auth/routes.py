"""
Auth API routes — register, login.

Route prefix: /auth
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_auth_service
from auth.service import AuthService
from utils.schemas import LoginRequest, LoginResponse, RegisterRequest, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> UserPublic:
    """Register a new user."""
    return await service.register(req)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Login with email + password."""
    return await service.login(req.email, req.password)
