"""
Field validators shared by registration, creation and update.
"""

from __future__ import annotations

import re
from typing import Optional

from utils.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 6

_CIN_PATTERN = re.compile(r"[0-9]{8}")


def validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


def validate_cin(cin: Optional[str]) -> None:
    """A CIN is optional, but when given it must be exactly 8 digits."""
    if cin is None:
        return
    if not _CIN_PATTERN.fullmatch(cin):
        raise ValidationError("CIN must be exactly 8 digits")
