# src/tm_posting/infrastructure/persistence.py
"""PostingRepository - raw SQL implementation of the Posting Store.

Replace-mode (ceiling postings) relies on the partial unique index
uq_postings_replace_key (user_id, event_id, role) WHERE kind = 'ceiling';
concurrent submits under one key are serialized by PostgreSQL, last write wins.
"""
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.enums import EventType, Role, SubmitOutcome
from src.tm_posting.domain.models import Posting
from src.tm_profile.domain.models import Contact

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_SELECT_COLUMNS = """
    id, user_id, event_id, kind, role, percent, price, description, tickets,
    display_name, phone_e164, email, venmo_handle, cohort, created_at, updated_at
"""

_INSERT_VALUES = """
    (id, user_id, event_id, kind, role, percent, price, description, tickets,
     display_name, phone_e164, email, venmo_handle, cohort)
    VALUES (:id, CAST(:user_id AS UUID), :event_id, :kind, :role, :percent, :price,
            :description, :tickets, :display_name, :phone_e164, :email,
            :venmo_handle, :cohort)
"""

# xmax = 0 only for freshly inserted rows; an updated row carries the updating xid
_UPSERT_POSTING_SQL = text(f"""
    INSERT INTO postings {_INSERT_VALUES}
    ON CONFLICT (user_id, event_id, role) WHERE kind = 'ceiling'
    DO UPDATE SET
        percent = EXCLUDED.percent,
        tickets = EXCLUDED.tickets,
        display_name = EXCLUDED.display_name,
        phone_e164 = EXCLUDED.phone_e164,
        email = EXCLUDED.email,
        venmo_handle = EXCLUDED.venmo_handle,
        cohort = EXCLUDED.cohort
    RETURNING {_SELECT_COLUMNS}, (xmax = 0) AS inserted
""")

_INSERT_POSTING_SQL = text(f"""
    INSERT INTO postings {_INSERT_VALUES}
    RETURNING {_SELECT_COLUMNS}
""")

_GET_POSTING_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM postings WHERE id = :id
""")

# Arrival order (id is time-ordered) keeps the engine's stable tie-break meaningful
_LIST_BY_EVENT_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM postings WHERE event_id = :event_id
    ORDER BY created_at ASC, id ASC
""")

_LIST_BY_USER_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM postings WHERE user_id = CAST(:user_id AS UUID)
    ORDER BY created_at DESC, id DESC
""")

_DELETE_POSTING_SQL = text("DELETE FROM postings WHERE id = :id RETURNING id")

# One statement: the trade row exists iff the posting row was removed
_DELETE_AS_TRADED_SQL = text("""
    WITH removed AS (
        DELETE FROM postings WHERE id = :posting_id
        RETURNING event_id, kind, role, user_id, tickets
    )
    INSERT INTO trades (id, event_id, source, buyer_id, seller_id, price, tickets)
    SELECT CAST(:trade_id AS VARCHAR), event_id, kind,
           CASE WHEN role = 'buyer' THEN user_id::text END,
           CASE WHEN role = 'seller' THEN user_id::text END,
           CAST(:price AS NUMERIC), tickets
    FROM removed
    RETURNING id
""")

_SYNC_CONTACT_SQL = text("""
    UPDATE postings
    SET display_name = :display_name,
        phone_e164 = :phone_e164,
        email = :email,
        venmo_handle = :venmo_handle,
        cohort = :cohort
    WHERE user_id = CAST(:user_id AS UUID)
    RETURNING event_id
""")

_COUNT_BY_EVENT_SQL = text("""
    SELECT event_id, COUNT(*) AS n
    FROM postings
    GROUP BY event_id
    ORDER BY event_id
""")


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_posting(row: Any) -> Posting:
    return Posting(
        id=row.id,
        user_id=str(row.user_id),
        event_id=row.event_id,
        kind=EventType(row.kind),
        role=Role(row.role),
        percent=row.percent,
        price=row.price,
        description=row.description,
        tickets=row.tickets,
        contact=Contact(
            display_name=row.display_name,
            phone_e164=row.phone_e164,
            email=row.email,
            venmo_handle=row.venmo_handle,
            cohort=row.cohort,
        ),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _posting_params(posting: Posting) -> dict[str, Any]:
    return {
        "id": posting.id,
        "user_id": posting.user_id,
        "event_id": posting.event_id,
        "kind": posting.kind.value,
        "role": posting.role.value,
        "percent": posting.percent,
        "price": posting.price,
        "description": posting.description,
        "tickets": posting.tickets,
        "display_name": posting.contact.display_name,
        "phone_e164": posting.contact.phone_e164,
        "email": posting.contact.email,
        "venmo_handle": posting.contact.venmo_handle,
        "cohort": posting.contact.cohort,
    }


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class PostingRepository:
    async def list_by_event(self, db: AsyncSession, event_id: str) -> list[Posting]:
        result = await db.execute(_LIST_BY_EVENT_SQL, {"event_id": event_id})
        return [_row_to_posting(row) for row in result.fetchall()]

    async def list_by_user(self, db: AsyncSession, user_id: str) -> list[Posting]:
        result = await db.execute(_LIST_BY_USER_SQL, {"user_id": user_id})
        return [_row_to_posting(row) for row in result.fetchall()]

    async def get(self, db: AsyncSession, posting_id: str) -> Posting | None:
        result = await db.execute(_GET_POSTING_SQL, {"id": posting_id})
        row = result.fetchone()
        return _row_to_posting(row) if row else None

    async def upsert(
        self, db: AsyncSession, posting: Posting
    ) -> tuple[SubmitOutcome, Posting]:
        """Replace-mode write. On conflict the existing row (and id) survives."""
        result = await db.execute(_UPSERT_POSTING_SQL, _posting_params(posting))
        row = result.fetchone()
        outcome = SubmitOutcome.CREATED if row.inserted else SubmitOutcome.REPLACED
        return outcome, _row_to_posting(row)

    async def insert(self, db: AsyncSession, posting: Posting) -> Posting:
        result = await db.execute(_INSERT_POSTING_SQL, _posting_params(posting))
        return _row_to_posting(result.fetchone())

    async def delete(self, db: AsyncSession, posting_id: str) -> bool:
        result = await db.execute(_DELETE_POSTING_SQL, {"id": posting_id})
        return result.fetchone() is not None

    async def delete_as_traded(
        self, db: AsyncSession, posting_id: str, trade_id: str, price: Decimal
    ) -> bool:
        """Remove the posting and record its trade atomically.

        Returns False (and records nothing) when the posting row is already gone.
        """
        result = await db.execute(
            _DELETE_AS_TRADED_SQL,
            {"posting_id": posting_id, "trade_id": trade_id, "price": price},
        )
        return result.fetchone() is not None

    async def sync_contact(
        self, db: AsyncSession, user_id: str, contact: Contact
    ) -> list[str]:
        """Rewrite the contact snapshot on all of a user's postings.

        Returns the event ids touched (one entry per updated posting).
        """
        result = await db.execute(
            _SYNC_CONTACT_SQL,
            {
                "user_id": user_id,
                "display_name": contact.display_name,
                "phone_e164": contact.phone_e164,
                "email": contact.email,
                "venmo_handle": contact.venmo_handle,
                "cohort": contact.cohort,
            },
        )
        return [row.event_id for row in result.fetchall()]

    async def count_by_event(self, db: AsyncSession) -> dict[str, int]:
        result = await db.execute(_COUNT_BY_EVENT_SQL)
        return {row.event_id: row.n for row in result.fetchall()}
