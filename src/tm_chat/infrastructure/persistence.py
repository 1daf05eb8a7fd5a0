from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_chat.domain.models import ChatMessage

_INSERT_SQL = text("""
    INSERT INTO chat_messages (id, user_id, username, message)
    VALUES (:id, CAST(:user_id AS UUID), :username, :message)
    RETURNING id, user_id, username, message, created_at
""")

_LIST_RECENT_SQL = text("""
    SELECT id, user_id, username, message, created_at
    FROM chat_messages
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")

_DELETE_SQL = text("DELETE FROM chat_messages WHERE id = :id RETURNING id")


def _row_to_message(row: Any) -> ChatMessage:
    return ChatMessage(
        id=row.id,
        user_id=str(row.user_id),
        username=row.username,
        message=row.message,
        created_at=row.created_at,
    )


class ChatRepository:
    async def insert(self, db: AsyncSession, message: ChatMessage) -> ChatMessage:
        result = await db.execute(
            _INSERT_SQL,
            {
                "id": message.id,
                "user_id": message.user_id,
                "username": message.username,
                "message": message.message,
            },
        )
        return _row_to_message(result.fetchone())

    async def list_recent(self, db: AsyncSession, limit: int) -> list[ChatMessage]:
        result = await db.execute(_LIST_RECENT_SQL, {"limit": limit})
        return [_row_to_message(row) for row in result.fetchall()]

    async def delete(self, db: AsyncSession, message_id: str) -> bool:
        result = await db.execute(_DELETE_SQL, {"id": message_id})
        return result.fetchone() is not None
