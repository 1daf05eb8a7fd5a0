"""Pydantic schemas for tm_event requests and responses."""

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from src.tm_common.datetime_utils import iso_or_none
from src.tm_common.enums import EventType
from src.tm_common.money import MAX_AMOUNT, to_display
from src.tm_event.domain.models import Event


class EventOut(BaseModel):
    id: str
    label: str
    type: EventType
    face_value: Decimal | None
    face_value_display: str | None
    created_at: str | None

    @classmethod
    def from_domain(cls, e: Event) -> "EventOut":
        return cls(
            id=e.id,
            label=e.label,
            type=e.type,
            face_value=e.face_value,
            face_value_display=to_display(e.face_value) if e.face_value is not None else None,
            created_at=iso_or_none(e.created_at),
        )


class EventListResponse(BaseModel):
    items: list[EventOut]


class CreateEventRequest(BaseModel):
    id: str = Field(..., min_length=1, max_length=64, pattern=r"^[a-z0-9][a-z0-9-]*$")
    label: str = Field(..., min_length=1, max_length=200)
    type: EventType
    face_value: Decimal | None = Field(None, ge=0, le=MAX_AMOUNT)

    @model_validator(mode="after")
    def face_value_matches_type(self) -> "CreateEventRequest":
        if self.type is EventType.CEILING and self.face_value is None:
            raise ValueError("ceiling events require a face_value")
        if self.type is EventType.MARKET:
            self.face_value = None
        return self

    def to_domain(self) -> Event:
        return Event(id=self.id, label=self.label.strip(), type=self.type, face_value=self.face_value)
