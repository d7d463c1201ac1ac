"""Unit tests for password hashing and access tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from constituency_hub.core.exceptions import AuthenticationError
from constituency_hub.server.core.config import settings
from constituency_hub.server.services.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = get_password_hash("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_long_password_truncated_to_72_bytes(self):
        hashed = get_password_hash("a" * 72 + "tail")

        assert verify_password("a" * 72, hashed) is True

    def test_malformed_hash(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestTokens:
    def test_round_trip_claims(self):
        payload = decode_access_token(create_access_token("user-1", "admin"))

        assert payload["sub"] == "user-1"
        assert payload["role"] == "admin"
        assert payload["type"] == "access"

    def test_expired(self):
        with pytest.raises(AuthenticationError):
            decode_access_token(create_access_token("user-1", "admin", expires_delta=timedelta(seconds=-5)))

    def test_wrong_secret(self):
        token = jwt.encode({"sub": "user-1", "type": "access"}, "other-secret", algorithm="HS256")

        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_wrong_token_type(self):
        security = settings.security
        token = jwt.encode({"sub": "user-1", "type": "refresh"}, security.jwt_secret_key, algorithm="HS256")

        with pytest.raises(AuthenticationError):
            decode_access_token(token)
