from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_chat.domain.models import ChatMessage


class ChatRepositoryProtocol(Protocol):
    async def insert(self, db: AsyncSession, message: ChatMessage) -> ChatMessage: ...

    async def list_recent(self, db: AsyncSession, limit: int) -> list[ChatMessage]: ...

    async def delete(self, db: AsyncSession, message_id: str) -> bool: ...
