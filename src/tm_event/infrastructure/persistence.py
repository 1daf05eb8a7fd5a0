"""EventRepository - raw text() SQL over the events table."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.enums import EventType
from src.tm_event.domain.models import Event

_LIST_EVENTS_SQL = text("""
    SELECT id, label, type, face_value, created_at
    FROM events
    ORDER BY created_at DESC, id
""")

_GET_EVENT_SQL = text("""
    SELECT id, label, type, face_value, created_at
    FROM events
    WHERE id = :event_id
""")

# ON CONFLICT DO NOTHING: an existing id is reported, never overwritten
_INSERT_EVENT_SQL = text("""
    INSERT INTO events (id, label, type, face_value)
    VALUES (:id, :label, :type, :face_value)
    ON CONFLICT (id) DO NOTHING
    RETURNING id
""")

_DELETE_EVENT_SQL = text("DELETE FROM events WHERE id = :event_id RETURNING id")


def _row_to_event(row: Any) -> Event:
    return Event(
        id=row.id,
        label=row.label,
        type=EventType(row.type),
        face_value=row.face_value,
        created_at=row.created_at,
    )


class EventRepository:
    async def list_events(self, db: AsyncSession) -> list[Event]:
        result = await db.execute(_LIST_EVENTS_SQL)
        return [_row_to_event(row) for row in result.fetchall()]

    async def get_event(self, db: AsyncSession, event_id: str) -> Event | None:
        result = await db.execute(_GET_EVENT_SQL, {"event_id": event_id})
        row = result.fetchone()
        return _row_to_event(row) if row else None

    async def create_event(self, db: AsyncSession, event: Event) -> bool:
        """Insert; returns False when the id already exists."""
        result = await db.execute(
            _INSERT_EVENT_SQL,
            {
                "id": event.id,
                "label": event.label,
                "type": event.type.value,
                "face_value": event.face_value,
            },
        )
        return result.fetchone() is not None

    async def delete_event(self, db: AsyncSession, event_id: str) -> bool:
        """Delete (postings cascade); returns False when nothing was deleted."""
        result = await db.execute(_DELETE_EVENT_SQL, {"event_id": event_id})
        return result.fetchone() is not None
