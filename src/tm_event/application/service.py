"""EventApplicationService - event catalog reads plus admin create/delete.

Write methods leave commit/rollback to the caller (AdminService).
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.errors import EventExistsError, EventNotFoundError
from src.tm_event.application.schemas import EventListResponse, EventOut
from src.tm_event.domain.models import DEFAULT_EVENTS, Event
from src.tm_event.domain.repository import EventRepositoryProtocol
from src.tm_event.infrastructure.persistence import EventRepository

logger = logging.getLogger(__name__)


class EventApplicationService:
    def __init__(self, repo: EventRepositoryProtocol | None = None) -> None:
        self._repo: EventRepositoryProtocol = repo or EventRepository()

    async def list_events(self, db: AsyncSession) -> EventListResponse:
        events = await self._repo.list_events(db)
        return EventListResponse(items=[EventOut.from_domain(e) for e in events])

    async def find_event(self, db: AsyncSession, event_id: str) -> Event | None:
        """Lookup used by read paths that treat an unknown event as empty."""
        return await self._repo.get_event(db, event_id)

    async def require_event(self, db: AsyncSession, event_id: str) -> Event:
        event = await self._repo.get_event(db, event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def get_event(self, db: AsyncSession, event_id: str) -> EventOut:
        return EventOut.from_domain(await self.require_event(db, event_id))

    async def create_event(self, db: AsyncSession, event: Event) -> EventOut:
        if not await self._repo.create_event(db, event):
            raise EventExistsError(event.id)
        logger.info("event created: %s (%s)", event.id, event.type.value)
        return EventOut.from_domain(event)

    async def delete_event(self, db: AsyncSession, event_id: str) -> None:
        if not await self._repo.delete_event(db, event_id):
            raise EventNotFoundError(event_id)
        logger.info("event deleted: %s", event_id)

    async def seed_default_events(self, db: AsyncSession) -> list[str]:
        """Idempotent; returns the ids that were newly inserted."""
        created = []
        for event in DEFAULT_EVENTS:
            if await self._repo.create_event(db, event):
                created.append(event.id)
        return created
