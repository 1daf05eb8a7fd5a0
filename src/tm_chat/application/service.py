"""ChatService - community chat board."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.tm_chat.application.schemas import ChatHistoryResponse, ChatMessageOut
from src.tm_chat.domain.models import ChatMessage
from src.tm_chat.domain.repository import ChatRepositoryProtocol
from src.tm_chat.infrastructure.persistence import ChatRepository
from src.tm_common.errors import MessageNotFoundError
from src.tm_common.id_generator import generate_id
from src.tm_profile.domain.repository import ProfileRepositoryProtocol
from src.tm_profile.infrastructure.persistence import ProfileRepository
from src.tm_rules.rules.message_length import check_message

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(
        self,
        repo: ChatRepositoryProtocol | None = None,
        profiles: ProfileRepositoryProtocol | None = None,
    ) -> None:
        self._repo: ChatRepositoryProtocol = repo or ChatRepository()
        self._profiles: ProfileRepositoryProtocol = profiles or ProfileRepository()

    async def post_message(
        self, db: AsyncSession, user_id: str, account_username: str, text: str
    ) -> ChatMessageOut:
        """Posts under the profile's full name, or the account username without one."""
        body = check_message(text, settings.CHAT_MAX_LENGTH)
        profile = await self._profiles.get(db, user_id)
        username = profile.full_name if profile is not None else account_username

        try:
            message = await self._repo.insert(
                db,
                ChatMessage(id=generate_id(), user_id=user_id, username=username, message=body),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return ChatMessageOut.from_domain(message)

    async def list_recent(self, db: AsyncSession, limit: int | None = None) -> ChatHistoryResponse:
        messages = await self._repo.list_recent(db, limit or settings.CHAT_HISTORY_LIMIT)
        return ChatHistoryResponse(items=[ChatMessageOut.from_domain(m) for m in messages])

    async def delete_message(self, db: AsyncSession, message_id: str) -> None:
        try:
            if not await self._repo.delete(db, message_id):
                raise MessageNotFoundError(message_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("chat message deleted: %s", message_id)
