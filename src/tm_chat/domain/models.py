from dataclasses import dataclass
from datetime import datetime


@dataclass
class ChatMessage:
    id: str
    user_id: str
    username: str  # display name at post time
    message: str
    created_at: datetime | None = None
