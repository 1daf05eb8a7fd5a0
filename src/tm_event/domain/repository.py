"""EventRepository Protocol - unit tests inject a mock conforming to it."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_event.domain.models import Event


class EventRepositoryProtocol(Protocol):
    async def list_events(self, db: AsyncSession) -> list[Event]: ...

    async def get_event(self, db: AsyncSession, event_id: str) -> Event | None: ...

    async def create_event(self, db: AsyncSession, event: Event) -> bool: ...

    async def delete_event(self, db: AsyncSession, event_id: str) -> bool: ...
