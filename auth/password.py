"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  Passwords are first reduced to a
base64 SHA-256 digest (44 bytes) because bcrypt only accepts 72 bytes of
input.
"""

from __future__ import annotations

import base64
import hashlib

import bcrypt

from config.settings import config


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted, work factor from ``BCRYPT_ROUNDS``)."""
    salt = bcrypt.gensalt(rounds=config.bcrypt_rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode())
    except (ValueError, TypeError):
        return False
