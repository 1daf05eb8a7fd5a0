"""Unit tests for ProfileService."""

from unittest.mock import AsyncMock

import pytest

from src.tm_common.enums import PostingChange, Role
from src.tm_common.errors import ProfileNotFoundError
from src.tm_posting.application.service import PostingLifecycleService
from src.tm_profile.application.schemas import SaveProfileRequest
from src.tm_profile.application.service import ProfileService
from tests.factories import InMemoryPostingRepository, make_posting, make_profile


def _request() -> SaveProfileRequest:
    return SaveProfileRequest(
        full_name="Ada King",
        school_email="ada@upenn.edu",
        cohort="Penn",
        area_code="+1",
        phone_digits="2155550199",
        venmo_handle="ada-k",
        bio="Updated bio",
    )


@pytest.fixture
def profile_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.upsert.side_effect = lambda db, profile: profile
    return repo


@pytest.fixture
def service(profile_repo: AsyncMock, posting_repo: InMemoryPostingRepository) -> ProfileService:
    postings = PostingLifecycleService(repo=posting_repo, events=AsyncMock(), profiles=profile_repo)
    return ProfileService(repo=profile_repo, postings=postings)


class TestGetProfile:
    async def test_found(self, service: ProfileService, profile_repo: AsyncMock) -> None:
        profile_repo.get.return_value = make_profile("user-1")
        result = await service.get_profile(AsyncMock(), "user-1")
        assert result.full_name == "Ada Lovelace"

    async def test_missing(self, service: ProfileService, profile_repo: AsyncMock) -> None:
        profile_repo.get.return_value = None
        with pytest.raises(ProfileNotFoundError):
            await service.get_profile(AsyncMock(), "user-1")


class TestSaveProfile:
    async def test_syncs_contact_on_live_postings(
        self, service: ProfileService, posting_repo: InMemoryPostingRepository
    ) -> None:
        db = AsyncMock()
        await posting_repo.insert(db, make_posting("p1", "user-1", Role.BUYER, percent=80))
        await posting_repo.insert(
            db, make_posting("p2", "user-1", Role.SELLER, price="20", event_id="gala")
        )
        await posting_repo.insert(db, make_posting("p3", "user-2", Role.SELLER, percent=60))

        result, notices = await service.save_profile(db, "user-1", _request())

        assert result.postings_synced == 2
        assert result.profile.phone_e164 == "+12155550199"
        assert {n.event_id for n in notices} == {"evt-1", "gala"}
        assert all(n.op is PostingChange.SYNCED for n in notices)
        assert posting_repo.rows["p1"].contact.display_name == "Ada King"
        assert posting_repo.rows["p2"].contact.venmo_handle == "ada-k"
        assert posting_repo.rows["p3"].contact.display_name == "User-2 Example"
        db.commit.assert_awaited_once()

    async def test_failure_rolls_back(self, service: ProfileService, profile_repo: AsyncMock) -> None:
        db = AsyncMock()
        profile_repo.upsert.side_effect = RuntimeError("db down")
        with pytest.raises(RuntimeError):
            await service.save_profile(db, "user-1", _request())
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()
