"""006: create trades table

Revision ID: 006
Revises: 005
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # No FK to events: trade history outlives deleted events
    op.execute("""
        CREATE TABLE trades (
            id              VARCHAR(64)     PRIMARY KEY,
            event_id        VARCHAR(64)     NOT NULL,
            source          VARCHAR(10)     NOT NULL,
            buyer_id        VARCHAR(64),
            seller_id       VARCHAR(64),
            price           NUMERIC(12, 2)  NOT NULL,
            tickets         INT             NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_trades_source  CHECK (source IN ('ceiling', 'market')),
            CONSTRAINT ck_trades_price   CHECK (price >= 0),
            CONSTRAINT ck_trades_tickets CHECK (tickets > 0),
            CONSTRAINT ck_trades_party   CHECK (buyer_id IS NOT NULL OR seller_id IS NOT NULL),
            CONSTRAINT ck_trades_diff_users CHECK (
                buyer_id IS NULL OR seller_id IS NULL OR buyer_id != seller_id
            )
        );
    """)
    op.execute("CREATE INDEX idx_trades_event_time ON trades (event_id, created_at DESC);")
    op.execute("COMMENT ON TABLE trades IS 'Completed trades; SUM(tickets) is the traded-ticket counter';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS trades CASCADE;")
