"""ProfileService - profile reads and saves.

Saving a profile re-syncs the contact snapshot on the user's live postings in
the same transaction, so a posting never shows stale contact details after
the save commits.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.errors import ProfileNotFoundError
from src.tm_posting.application.service import PostingLifecycleService
from src.tm_posting.domain.models import ChangeNotice
from src.tm_profile.application.schemas import ProfileOut, SaveProfileRequest, SaveProfileResponse
from src.tm_profile.domain.models import Profile
from src.tm_profile.domain.repository import ProfileRepositoryProtocol
from src.tm_profile.infrastructure.persistence import ProfileRepository

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(
        self,
        repo: ProfileRepositoryProtocol | None = None,
        postings: PostingLifecycleService | None = None,
    ) -> None:
        self._repo: ProfileRepositoryProtocol = repo or ProfileRepository()
        self._postings = postings or PostingLifecycleService(profiles=self._repo)

    async def find_profile(self, db: AsyncSession, user_id: str) -> Profile | None:
        return await self._repo.get(db, user_id)

    async def get_profile(self, db: AsyncSession, user_id: str) -> ProfileOut:
        profile = await self._repo.get(db, user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return ProfileOut.from_domain(profile)

    async def save_profile(
        self, db: AsyncSession, user_id: str, req: SaveProfileRequest
    ) -> tuple[SaveProfileResponse, list[ChangeNotice]]:
        try:
            profile = await self._repo.upsert(db, req.to_domain(user_id))
            synced, notices = await self._postings.sync_contact_fields(
                db, user_id, profile.to_contact()
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("profile saved: user=%s postings_synced=%d", user_id, synced)
        response = SaveProfileResponse(profile=ProfileOut.from_domain(profile), postings_synced=synced)
        return response, notices
