"""003: create profiles table

Revision ID: 003
Revises: 002
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE profiles (
            user_id         UUID            PRIMARY KEY REFERENCES users (id) ON DELETE CASCADE,
            full_name       VARCHAR(128)    NOT NULL,
            school_email    VARCHAR(254)    NOT NULL,
            cohort          VARCHAR(16)     NOT NULL,
            phone_e164      VARCHAR(20)     NOT NULL,
            venmo_handle    VARCHAR(64)     NOT NULL,
            bio             TEXT            NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_profiles_cohort CHECK (
                cohort IN ('Wharton', 'Penn', 'HBS', 'GSB', 'WG26', 'WG27')
            ),
            CONSTRAINT ck_profiles_edu_email CHECK (LOWER(school_email) LIKE '%.edu'),
            CONSTRAINT ck_profiles_phone     CHECK (phone_e164 ~ '^\\+[0-9]{6,16}$'),
            CONSTRAINT ck_profiles_bio       CHECK (LENGTH(TRIM(bio)) > 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_profiles_updated_at
            BEFORE UPDATE ON profiles
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE profiles IS 'Contact details snapshotted onto postings';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS profiles CASCADE;")
