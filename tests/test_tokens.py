"""
Tests for access token issuing and verification.
"""

from datetime import timedelta

import jwt
import pytest

from auth.tokens import create_token, verify_token
from config.settings import config
from utils.exceptions import InvalidTokenError


class TestTokens:
    def test_claims(self):
        claims = verify_token(create_token(42, "a@x.com"))
        assert claims["sub"] == "42"
        assert claims["email"] == "a@x.com"
        assert claims["exp"] - claims["iat"] == config.jwt_expiry_seconds

    def test_default_lifetime_is_one_hour(self):
        assert config.jwt_expiry_seconds == 3600

    def test_expired_token_rejected(self):
        token = create_token(1, "a@x.com", expires_delta=timedelta(seconds=-10))
        with pytest.raises(InvalidTokenError, match="expired"):
            verify_token(token)

    def test_wrong_secret_rejected(self):
        forged = jwt.encode({"sub": "1", "exp": 9999999999}, "other-secret", algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            verify_token(forged)

    def test_garbage_rejected(self):
        with pytest.raises(InvalidTokenError):
            verify_token("invalid.token.here")

    def test_missing_sub_rejected(self):
        token = jwt.encode({"exp": 9999999999}, config.jwt_secret, algorithm=config.jwt_algorithm)
        with pytest.raises(InvalidTokenError):
            verify_token(token)
