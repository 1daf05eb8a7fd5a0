"""Posting domain model - pure dataclass, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.tm_common.enums import EventType, PostingChange, Role
from src.tm_profile.domain.models import Contact


@dataclass
class Posting:
    id: str
    user_id: str
    event_id: str
    kind: EventType  # copied from the event at submit time
    role: Role
    contact: Contact  # snapshot, re-synced when the profile changes
    percent: int | None = None  # ceiling: buyer ceiling / seller floor, 0-100
    price: Decimal | None = None  # market: explicit price
    description: str | None = None  # market only
    tickets: int = 1
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_buyer(self) -> bool:
        return self.role is Role.BUYER

    @property
    def is_seller(self) -> bool:
        return self.role is Role.SELLER

    @property
    def is_replace_mode(self) -> bool:
        """Ceiling postings keep one live row per (user, event, role)."""
        return self.kind is EventType.CEILING


@dataclass(frozen=True)
class ChangeNotice:
    """Published on the change feed after a committed posting mutation."""

    event_id: str
    op: PostingChange
    posting_id: str | None = None
