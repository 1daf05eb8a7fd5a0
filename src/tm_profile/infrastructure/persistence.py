"""ProfileRepository - raw SQL over the profiles table."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_profile.domain.models import Profile

_COLUMNS = """
    user_id, full_name, school_email, cohort, phone_e164,
    venmo_handle, bio, created_at, updated_at
"""

_GET_PROFILE_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM profiles
    WHERE user_id = CAST(:user_id AS UUID)
""")

_UPSERT_PROFILE_SQL = text(f"""
    INSERT INTO profiles (user_id, full_name, school_email, cohort,
                          phone_e164, venmo_handle, bio)
    VALUES (CAST(:user_id AS UUID), :full_name, :school_email, :cohort,
            :phone_e164, :venmo_handle, :bio)
    ON CONFLICT (user_id) DO UPDATE
    SET full_name = EXCLUDED.full_name,
        school_email = EXCLUDED.school_email,
        cohort = EXCLUDED.cohort,
        phone_e164 = EXCLUDED.phone_e164,
        venmo_handle = EXCLUDED.venmo_handle,
        bio = EXCLUDED.bio
    RETURNING {_COLUMNS}
""")


def _row_to_profile(row: Any) -> Profile:
    return Profile(
        user_id=str(row.user_id),
        full_name=row.full_name,
        school_email=row.school_email,
        cohort=row.cohort,
        phone_e164=row.phone_e164,
        venmo_handle=row.venmo_handle,
        bio=row.bio,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class ProfileRepository:
    async def get(self, db: AsyncSession, user_id: str) -> Profile | None:
        result = await db.execute(_GET_PROFILE_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_profile(row) if row else None

    async def upsert(self, db: AsyncSession, profile: Profile) -> Profile:
        result = await db.execute(
            _UPSERT_PROFILE_SQL,
            {
                "user_id": profile.user_id,
                "full_name": profile.full_name,
                "school_email": profile.school_email,
                "cohort": profile.cohort,
                "phone_e164": profile.phone_e164,
                "venmo_handle": profile.venmo_handle,
                "bio": profile.bio,
            },
        )
        return _row_to_profile(result.fetchone())
