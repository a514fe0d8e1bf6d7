"""
Domain exceptions raised by the store and services.

The HTTP layer maps each class to a status code in
``api.exception_handlers``; nothing below the routes knows about HTTP.
"""

from __future__ import annotations


class UserServiceError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(UserServiceError):
    """Bad input shape, length or format."""


class UniquenessError(ValidationError):
    """Email or username already belongs to another user."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class AuthenticationError(UserServiceError):
    """Bad credentials or an unusable access token."""


class InvalidTokenError(AuthenticationError):
    pass


class UserNotFoundError(UserServiceError):
    def __init__(self, user_id: int):
        super().__init__(f"User with id {user_id} not found")
        self.user_id = user_id
