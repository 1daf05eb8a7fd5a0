"""Domain models for tm_event - pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.tm_common.enums import EventType


@dataclass
class Event:
    id: str
    label: str
    type: EventType
    face_value: Decimal | None  # ceiling events only
    created_at: datetime | None = None

    @property
    def is_ceiling(self) -> bool:
        return self.type is EventType.CEILING


# Seeded by migration 008 and by POST /admin/seed
DEFAULT_EVENTS: tuple[Event, ...] = (
    Event(
        id="colombia-trek",
        label="Colombia Trek - Face Value $0",
        type=EventType.CEILING,
        face_value=Decimal("0"),
    ),
)
