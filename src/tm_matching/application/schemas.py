# src/tm_matching/application/schemas.py
from decimal import Decimal

from pydantic import BaseModel

from src.tm_common.money import to_display
from src.tm_matching.domain.models import Match
from src.tm_posting.application.schemas import ContactOut


class MatchOut(BaseModel):
    my_posting_id: str
    my_role: str
    counterpart_posting_id: str
    counterpart_role: str
    counterpart_percent: int | None
    counterpart_price: Decimal | None
    counterpart_description: str | None
    counterpart_contact: ContactOut
    distance: Decimal
    agreed_percent: int | None
    agreed_price: Decimal | None
    agreed_price_display: str | None
    agreed_tickets: int

    @classmethod
    def from_domain(cls, m: Match) -> "MatchOut":
        return cls(
            my_posting_id=m.mine.id,
            my_role=m.mine.role.value,
            counterpart_posting_id=m.other.id,
            counterpart_role=m.other.role.value,
            counterpart_percent=m.other.percent,
            counterpart_price=m.other.price,
            counterpart_description=m.other.description,
            counterpart_contact=ContactOut.from_domain(m.other.contact),
            distance=m.distance,
            agreed_percent=m.agreed_percent,
            agreed_price=m.agreed_price,
            agreed_price_display=to_display(m.agreed_price) if m.agreed_price is not None else None,
            agreed_tickets=m.agreed_tickets,
        )


class MatchListResponse(BaseModel):
    event_id: str
    items: list[MatchOut]
