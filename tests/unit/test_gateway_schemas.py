"""Unit tests for tm_gateway request schemas."""

import pytest
from pydantic import ValidationError

from src.tm_gateway.user.schemas import RegisterRequest


class TestRegisterRequest:
    def test_valid_input(self) -> None:
        req = RegisterRequest(username="ada.l", email="ada@upenn.edu", password="Trekking1")
        assert req.username == "ada.l"

    def test_username_too_short(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="ab", email="a@b.com", password="Trekking1")

    def test_username_invalid_chars(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="ada l", email="a@b.com", password="Trekking1")

    def test_invalid_email(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="adal", email="not-an-email", password="Trekking1")

    def test_password_needs_digit(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="adal", email="a@b.com", password="NoDigitsHere")

    def test_password_needs_letter(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="adal", email="a@b.com", password="12345678")
