from pydantic import BaseModel, Field

from src.tm_chat.domain.models import ChatMessage
from src.tm_common.datetime_utils import iso_or_none


class PostMessageRequest(BaseModel):
    # length is enforced after trimming in the service (6001)
    message: str = Field(..., max_length=2000)


class ChatMessageOut(BaseModel):
    id: str
    user_id: str
    username: str
    message: str
    created_at: str | None

    @classmethod
    def from_domain(cls, m: ChatMessage) -> "ChatMessageOut":
        return cls(
            id=m.id,
            user_id=m.user_id,
            username=m.username,
            message=m.message,
            created_at=iso_or_none(m.created_at),
        )


class ChatHistoryResponse(BaseModel):
    items: list[ChatMessageOut]  # newest first
