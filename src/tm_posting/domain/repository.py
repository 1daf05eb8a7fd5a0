# src/tm_posting/domain/repository.py
"""PostingRepository Protocol - the Posting Store contract."""
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.enums import SubmitOutcome
from src.tm_posting.domain.models import Posting
from src.tm_profile.domain.models import Contact


class PostingRepositoryProtocol(Protocol):
    async def list_by_event(self, db: AsyncSession, event_id: str) -> list[Posting]: ...

    async def list_by_user(self, db: AsyncSession, user_id: str) -> list[Posting]: ...

    async def get(self, db: AsyncSession, posting_id: str) -> Posting | None: ...

    async def upsert(
        self, db: AsyncSession, posting: Posting
    ) -> tuple[SubmitOutcome, Posting]: ...

    async def insert(self, db: AsyncSession, posting: Posting) -> Posting: ...

    async def delete(self, db: AsyncSession, posting_id: str) -> bool: ...

    async def delete_as_traded(
        self, db: AsyncSession, posting_id: str, trade_id: str, price: Decimal
    ) -> bool: ...

    async def sync_contact(
        self, db: AsyncSession, user_id: str, contact: Contact
    ) -> list[str]: ...

    async def count_by_event(self, db: AsyncSession) -> dict[str, int]: ...
