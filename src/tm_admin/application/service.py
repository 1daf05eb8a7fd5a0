# src/tm_admin/application/service.py
"""Admin application service.

Composes the catalog, posting, chat and trade services; every write commits
here or in the delegated service.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_chat.application.service import ChatService
from src.tm_common.enums import PostingChange
from src.tm_event.application.schemas import EventOut
from src.tm_event.application.service import EventApplicationService
from src.tm_event.domain.models import Event
from src.tm_posting.application.service import PostingLifecycleService
from src.tm_posting.domain.models import ChangeNotice
from src.tm_posting.domain.repository import PostingRepositoryProtocol
from src.tm_posting.infrastructure.persistence import PostingRepository
from src.tm_trade.application.service import TradeService

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        events: EventApplicationService | None = None,
        postings: PostingLifecycleService | None = None,
        posting_repo: PostingRepositoryProtocol | None = None,
        chat: ChatService | None = None,
        trades: TradeService | None = None,
    ) -> None:
        self._events = events or EventApplicationService()
        self._posting_repo: PostingRepositoryProtocol = posting_repo or PostingRepository()
        self._postings = postings or PostingLifecycleService(repo=self._posting_repo)
        self._chat = chat or ChatService()
        self._trades = trades or TradeService()

    async def create_event(self, db: AsyncSession, event: Event) -> EventOut:
        try:
            result = await self._events.create_event(db, event)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return result

    async def delete_event(self, db: AsyncSession, event_id: str) -> ChangeNotice:
        """Postings of the event go with it (ON DELETE CASCADE)."""
        try:
            await self._events.delete_event(db, event_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return ChangeNotice(event_id, PostingChange.EVENT_REMOVED)

    async def seed_events(self, db: AsyncSession) -> dict[str, Any]:
        try:
            created = await self._events.seed_default_events(db)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("seeded %d default event(s)", len(created))
        return {"created": created}

    async def delete_posting(self, db: AsyncSession, posting_id: str) -> ChangeNotice:
        return await self._postings.admin_delete(db, posting_id)

    async def delete_chat_message(self, db: AsyncSession, message_id: str) -> None:
        await self._chat.delete_message(db, message_id)

    async def stats(self, db: AsyncSession) -> dict[str, Any]:
        counts = await self._posting_repo.count_by_event(db)
        return {
            "postings_by_event": counts,
            "total_postings": sum(counts.values()),
            "total_traded_tickets": await self._trades.total_traded_tickets(db),
        }
