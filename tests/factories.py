"""Domain object builders and in-memory fakes shared by unit tests."""

from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal

from src.tm_common.enums import EventType, Role, SubmitOutcome
from src.tm_posting.domain.models import Posting
from src.tm_profile.domain.models import Contact, Profile


def make_posting(
    posting_id: str,
    user_id: str,
    role: Role,
    percent: int | None = None,
    price: str | None = None,
    event_id: str = "evt-1",
    tickets: int = 1,
    description: str | None = None,
) -> Posting:
    kind = EventType.MARKET if price is not None else EventType.CEILING
    return Posting(
        id=posting_id,
        user_id=user_id,
        event_id=event_id,
        kind=kind,
        role=role,
        contact=Contact(display_name=f"{user_id.title()} Example"),
        percent=percent,
        price=Decimal(price) if price is not None else None,
        description=description,
        tickets=tickets,
    )


def make_profile(user_id: str = "user-1", full_name: str = "Ada Lovelace") -> Profile:
    return Profile(
        user_id=user_id,
        full_name=full_name,
        school_email="ada@upenn.edu",
        cohort="WG26",
        phone_e164="+12155550100",
        venmo_handle="ada-l",
        bio="Going to every trek",
    )


class InMemoryPostingRepository:
    """Posting store with the same replace-key semantics as the SQL upsert."""

    def __init__(self) -> None:
        self.rows: dict[str, Posting] = {}
        self.traded: list[tuple[str, str, Decimal, int]] = []
        self.fail_delete_as_traded = False

    async def list_by_event(self, db, event_id: str) -> list[Posting]:
        return [p for p in self.rows.values() if p.event_id == event_id]

    async def list_by_user(self, db, user_id: str) -> list[Posting]:
        return [p for p in self.rows.values() if p.user_id == user_id]

    async def get(self, db, posting_id: str) -> Posting | None:
        return self.rows.get(posting_id)

    async def upsert(self, db, posting: Posting) -> tuple[SubmitOutcome, Posting]:
        for existing in self.rows.values():
            if (
                existing.kind is EventType.CEILING
                and (existing.user_id, existing.event_id, existing.role)
                == (posting.user_id, posting.event_id, posting.role)
            ):
                updated = replace(
                    existing,
                    percent=posting.percent,
                    tickets=posting.tickets,
                    contact=posting.contact,
                    updated_at=datetime.now(UTC),
                )
                self.rows[existing.id] = updated
                return SubmitOutcome.REPLACED, updated
        stored = replace(posting, created_at=datetime.now(UTC))
        self.rows[stored.id] = stored
        return SubmitOutcome.CREATED, stored

    async def insert(self, db, posting: Posting) -> Posting:
        stored = replace(posting, created_at=datetime.now(UTC))
        self.rows[stored.id] = stored
        return stored

    async def delete(self, db, posting_id: str) -> bool:
        return self.rows.pop(posting_id, None) is not None

    async def delete_as_traded(self, db, posting_id: str, trade_id: str, price: Decimal) -> bool:
        if self.fail_delete_as_traded or posting_id not in self.rows:
            return False
        posting = self.rows.pop(posting_id)
        self.traded.append((posting_id, trade_id, price, posting.tickets))
        return True

    async def sync_contact(self, db, user_id: str, contact: Contact) -> list[str]:
        touched = []
        for pid, p in list(self.rows.items()):
            if p.user_id == user_id:
                self.rows[pid] = replace(p, contact=contact)
                touched.append(p.event_id)
        return touched

    async def count_by_event(self, db) -> dict[str, int]:
        counts: dict[str, int] = {}
        for p in self.rows.values():
            counts[p.event_id] = counts.get(p.event_id, 0) + 1
        return counts
