"""004: create events table

Revision ID: 004
Revises: 003
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE events (
            id              VARCHAR(64)     PRIMARY KEY,
            label           VARCHAR(200)    NOT NULL,
            type            VARCHAR(10)     NOT NULL,
            face_value      NUMERIC(12, 2),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_events_type CHECK (type IN ('ceiling', 'market')),
            CONSTRAINT ck_events_face_value CHECK (
                (type = 'ceiling' AND face_value IS NOT NULL AND face_value >= 0)
                OR (type = 'market' AND face_value IS NULL)
            )
        );
    """)
    op.execute("COMMENT ON TABLE events IS 'Event catalog; type selects the pricing model';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS events CASCADE;")
