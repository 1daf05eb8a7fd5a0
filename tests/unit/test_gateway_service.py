"""Unit tests for UserService (mocked DB)."""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.tm_common.errors import (
    AccountDisabledError,
    EmailExistsError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    UsernameExistsError,
)
from src.tm_gateway.auth.jwt_handler import create_access_token, create_refresh_token
from src.tm_gateway.user.db_models import UserModel
from src.tm_gateway.user.service import UserService


def _make_user(is_active: bool = True) -> UserModel:
    user = UserModel()
    user.id = uuid.uuid4()
    user.username = "ada_l"
    user.email = "ada@upenn.edu"
    user.password_hash = "$2b$12$fakehash"
    user.is_active = is_active
    return user


def _scalar(value: object) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


@pytest.fixture
def mock_db() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service() -> UserService:
    return UserService()


class TestRegister:
    async def test_duplicate_username(self, service: UserService, mock_db: AsyncMock) -> None:
        mock_db.execute = AsyncMock(return_value=_scalar(_make_user()))
        with pytest.raises(UsernameExistsError):
            await service.register("ada_l", "new@upenn.edu", "Trekking1", mock_db)

    async def test_duplicate_email(self, service: UserService, mock_db: AsyncMock) -> None:
        mock_db.execute = AsyncMock(side_effect=[_scalar(None), _scalar(_make_user())])
        with pytest.raises(EmailExistsError):
            await service.register("someone", "ada@upenn.edu", "Trekking1", mock_db)

    async def test_creates_user(self, service: UserService, mock_db: AsyncMock) -> None:
        mock_db.execute = AsyncMock(return_value=_scalar(None))
        mock_db.add = MagicMock()

        user = await service.register("someone", "someone@upenn.edu", "Trekking1", mock_db)

        assert user.username == "someone"
        assert user.password_hash != "Trekking1"
        mock_db.add.assert_called_once_with(user)
        mock_db.flush.assert_awaited_once()


class TestLogin:
    async def test_unknown_user(self, service: UserService, mock_db: AsyncMock) -> None:
        mock_db.execute = AsyncMock(return_value=_scalar(None))
        with pytest.raises(InvalidCredentialsError):
            await service.login("nobody", "Trekking1", mock_db)

    async def test_wrong_password(self, service: UserService, mock_db: AsyncMock) -> None:
        mock_db.execute = AsyncMock(return_value=_scalar(_make_user()))
        with (
            patch("src.tm_gateway.user.service.verify_password", return_value=False),
            pytest.raises(InvalidCredentialsError),
        ):
            await service.login("ada_l", "Wrong1pass", mock_db)

    async def test_disabled_account(self, service: UserService, mock_db: AsyncMock) -> None:
        mock_db.execute = AsyncMock(return_value=_scalar(_make_user(is_active=False)))
        with (
            patch("src.tm_gateway.user.service.verify_password", return_value=True),
            pytest.raises(AccountDisabledError),
        ):
            await service.login("ada_l", "Trekking1", mock_db)

    async def test_success_returns_token_pair(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_scalar(_make_user()))
        with patch("src.tm_gateway.user.service.verify_password", return_value=True):
            user, access, refresh = await service.login("ada_l", "Trekking1", mock_db)

        assert user.username == "ada_l"
        assert access != refresh


class TestRefresh:
    async def test_issues_access_token(self, service: UserService) -> None:
        access = await service.refresh(create_refresh_token("user-123"))
        assert access

    async def test_invalid_refresh_token(self, service: UserService) -> None:
        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh("not.a.real.token")

    async def test_access_token_rejected(self, service: UserService) -> None:
        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh(create_access_token("user-123"))
