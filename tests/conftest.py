"""Shared test fixtures."""

import os

# Settings() requires JWT_SECRET; rate limiting would need a live Redis.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from tests.factories import InMemoryPostingRepository


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def posting_repo() -> InMemoryPostingRepository:
    return InMemoryPostingRepository()
