# src/tm_posting/application/schemas.py
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from src.tm_common.datetime_utils import iso_or_none
from src.tm_common.enums import Role, SubmitOutcome
from src.tm_common.money import to_display
from src.tm_posting.domain.models import Posting
from src.tm_profile.domain.models import Contact


class SubmitPostingRequest(BaseModel):
    """Range and shape checks happen in the service so they map to 4xxx codes."""

    event_id: str = Field(..., min_length=1, max_length=64)
    role: Role
    percent: int | None = None
    price: Decimal | None = None
    description: str | None = Field(None, max_length=200)
    tickets: int = 1

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class ContactOut(BaseModel):
    display_name: str
    phone_e164: str | None
    email: str | None
    venmo_handle: str | None
    cohort: str | None

    @classmethod
    def from_domain(cls, c: Contact) -> "ContactOut":
        return cls(
            display_name=c.display_name,
            phone_e164=c.phone_e164,
            email=c.email,
            venmo_handle=c.venmo_handle,
            cohort=c.cohort,
        )


class PostingOut(BaseModel):
    id: str
    user_id: str
    event_id: str
    kind: str
    role: str
    percent: int | None
    price: Decimal | None
    price_display: str | None
    description: str | None
    tickets: int
    contact: ContactOut
    created_at: str | None
    updated_at: str | None

    @classmethod
    def from_domain(cls, p: Posting) -> "PostingOut":
        return cls(
            id=p.id,
            user_id=p.user_id,
            event_id=p.event_id,
            kind=p.kind.value,
            role=p.role.value,
            percent=p.percent,
            price=p.price,
            price_display=to_display(p.price) if p.price is not None else None,
            description=p.description,
            tickets=p.tickets,
            contact=ContactOut.from_domain(p.contact),
            created_at=iso_or_none(p.created_at),
            updated_at=iso_or_none(p.updated_at),
        )


class SubmitPostingResponse(BaseModel):
    outcome: SubmitOutcome
    posting: PostingOut


class PostingListResponse(BaseModel):
    items: list[PostingOut]


class WithdrawResponse(BaseModel):
    posting_id: str
    event_id: str


class MarkTradedResponse(BaseModel):
    posting_id: str
    tickets: int
    total_traded_tickets: int
