"""ProfileRepository Protocol (the Profile Store)."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_profile.domain.models import Profile


class ProfileRepositoryProtocol(Protocol):
    async def get(self, db: AsyncSession, user_id: str) -> Profile | None: ...

    async def upsert(self, db: AsyncSession, profile: Profile) -> Profile: ...
