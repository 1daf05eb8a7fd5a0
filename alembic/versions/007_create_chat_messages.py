"""007: create chat_messages table

Revision ID: 007
Revises: 006
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE chat_messages (
            id              VARCHAR(64)     PRIMARY KEY,
            user_id         UUID            NOT NULL REFERENCES users (id) ON DELETE CASCADE,
            username        VARCHAR(128)    NOT NULL,
            message         VARCHAR(250)    NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_chat_messages_len CHECK (CHAR_LENGTH(message) BETWEEN 1 AND 250)
        );
    """)
    op.execute("CREATE INDEX idx_chat_messages_time ON chat_messages (created_at DESC, id DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS chat_messages CASCADE;")
