"""005: create postings table

Revision ID: 005
Revises: 004
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE postings (
            id              VARCHAR(64)     PRIMARY KEY,
            user_id         UUID            NOT NULL REFERENCES users (id) ON DELETE CASCADE,
            event_id        VARCHAR(64)     NOT NULL REFERENCES events (id) ON DELETE CASCADE,
            kind            VARCHAR(10)     NOT NULL,
            role            VARCHAR(10)     NOT NULL,
            percent         SMALLINT,
            price           NUMERIC(12, 2),
            description     VARCHAR(200),
            tickets         INT             NOT NULL DEFAULT 1,
            display_name    VARCHAR(128)    NOT NULL,
            phone_e164      VARCHAR(20),
            email           VARCHAR(254),
            venmo_handle    VARCHAR(64),
            cohort          VARCHAR(16),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_postings_kind    CHECK (kind IN ('ceiling', 'market')),
            CONSTRAINT ck_postings_role    CHECK (role IN ('buyer', 'seller')),
            CONSTRAINT ck_postings_tickets CHECK (tickets >= 1),
            CONSTRAINT ck_postings_shape   CHECK (
                (kind = 'ceiling' AND percent BETWEEN 0 AND 100 AND price IS NULL)
                OR (kind = 'market' AND price > 0 AND percent IS NULL)
            )
        );
    """)
    # Replace-mode key: one live ceiling posting per (user, event, role).
    # ON CONFLICT in the posting store infers this partial index.
    op.execute("""
        CREATE UNIQUE INDEX uq_postings_replace_key
            ON postings (user_id, event_id, role)
            WHERE kind = 'ceiling';
    """)
    op.execute("CREATE INDEX idx_postings_event ON postings (event_id, created_at, id);")
    op.execute("CREATE INDEX idx_postings_user ON postings (user_id, created_at DESC);")
    op.execute("""
        CREATE TRIGGER trg_postings_updated_at
            BEFORE UPDATE ON postings
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE postings IS 'Live buy/sell postings; removed on withdraw or trade';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS postings CASCADE;")
