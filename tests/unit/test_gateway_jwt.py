"""Unit tests for the JWT handler."""

from datetime import timedelta
from unittest.mock import patch

import pytest
from jose import jwt

from src.tm_common.errors import InvalidCredentialsError, InvalidRefreshTokenError
from src.tm_gateway.auth.jwt_handler import (
    create_access_token,
    create_refresh_token,
    decode_token,
)


class TestClaims:
    def test_access_token_claims(self) -> None:
        payload = jwt.get_unverified_claims(create_access_token("user-123"))
        assert payload["sub"] == "user-123"
        assert payload["type"] == "access"

    def test_refresh_token_claims(self) -> None:
        payload = jwt.get_unverified_claims(create_refresh_token("user-123"))
        assert payload["type"] == "refresh"
        assert payload["exp"] > payload["iat"]


class TestDecode:
    def test_valid_access_token(self) -> None:
        payload = decode_token(create_access_token("user-abc"), expected_type="access")
        assert payload["sub"] == "user-abc"

    def test_access_token_rejected_as_refresh(self) -> None:
        with pytest.raises(InvalidRefreshTokenError):
            decode_token(create_access_token("user-abc"), expected_type="refresh")

    def test_refresh_token_rejected_as_access(self) -> None:
        with pytest.raises(InvalidCredentialsError):
            decode_token(create_refresh_token("user-abc"), expected_type="access")

    def test_garbage_token(self) -> None:
        with pytest.raises(InvalidCredentialsError):
            decode_token("not.a.token", expected_type="access")

    def test_expired_access_token(self) -> None:
        with patch("src.tm_gateway.auth.jwt_handler._ACCESS_EXPIRE", timedelta(seconds=-1)):
            token = create_access_token("user-abc")
        with pytest.raises(InvalidCredentialsError):
            decode_token(token, expected_type="access")

    def test_wrong_secret(self) -> None:
        token = jwt.encode({"sub": "x", "type": "access"}, "other-secret", algorithm="HS256")
        with pytest.raises(InvalidCredentialsError):
            decode_token(token, expected_type="access")
