"""Unit tests for PostingLifecycleService with an in-memory posting store."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.tm_common.enums import EventType, PostingChange, Role, SubmitOutcome
from src.tm_common.errors import (
    EventNotFoundError,
    InvalidPostingError,
    PercentOutOfRangeError,
    PostingNotFoundError,
    PostingNotOwnedError,
    PriceOutOfRangeError,
    ProfileNotFoundError,
    TicketLimitExceededError,
    TradeConsistencyError,
)
from src.tm_event.application.service import EventApplicationService
from src.tm_event.domain.models import Event
from src.tm_posting.application.schemas import SubmitPostingRequest
from src.tm_posting.application.service import PostingLifecycleService
from src.tm_profile.domain.models import Contact
from tests.factories import InMemoryPostingRepository, make_profile

CEILING_EVENT = Event(id="trek", label="Trek", type=EventType.CEILING, face_value=Decimal("120"))
MARKET_EVENT = Event(id="gala", label="Gala", type=EventType.MARKET, face_value=None)


@pytest.fixture
def db() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def trades() -> AsyncMock:
    repo = AsyncMock()
    repo.total_tickets.return_value = 7
    return repo


@pytest.fixture
def profiles() -> AsyncMock:
    repo = AsyncMock()
    repo.get.return_value = make_profile("user-1")
    return repo


@pytest.fixture
def service(
    posting_repo: InMemoryPostingRepository, profiles: AsyncMock, trades: AsyncMock
) -> PostingLifecycleService:
    events_repo = AsyncMock()
    events_repo.get_event.side_effect = lambda db, event_id: {
        "trek": CEILING_EVENT,
        "gala": MARKET_EVENT,
    }.get(event_id)
    return PostingLifecycleService(
        repo=posting_repo,
        events=EventApplicationService(repo=events_repo),
        profiles=profiles,
        trades=trades,
    )


def _ceiling(percent: int, role: Role = Role.BUYER, tickets: int = 1) -> SubmitPostingRequest:
    return SubmitPostingRequest(event_id="trek", role=role, percent=percent, tickets=tickets)


class TestSubmit:
    async def test_creates_posting_with_contact_snapshot(
        self, service: PostingLifecycleService, db: AsyncMock
    ) -> None:
        result, notice = await service.submit(db, "user-1", _ceiling(80))

        assert result.outcome is SubmitOutcome.CREATED
        assert result.posting.percent == 80
        assert result.posting.kind == "ceiling"
        assert result.posting.contact.display_name == "Ada Lovelace"
        assert result.posting.contact.venmo_handle == "ada-l"
        assert notice.op is PostingChange.CREATED
        assert notice.event_id == "trek"
        db.commit.assert_awaited_once()

    async def test_replace_mode_keeps_one_posting(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
    ) -> None:
        first, _ = await service.submit(db, "user-1", _ceiling(80))
        second, notice = await service.submit(db, "user-1", _ceiling(70))

        assert second.outcome is SubmitOutcome.REPLACED
        assert second.posting.id == first.posting.id
        assert notice.op is PostingChange.REPLACED
        live = await posting_repo.list_by_user(db, "user-1")
        assert len(live) == 1
        assert live[0].percent == 70

    async def test_other_role_is_a_separate_posting(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
    ) -> None:
        await service.submit(db, "user-1", _ceiling(80, Role.BUYER))
        result, _ = await service.submit(db, "user-1", _ceiling(60, Role.SELLER))

        assert result.outcome is SubmitOutcome.CREATED
        assert len(posting_repo.rows) == 2

    async def test_market_postings_append(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
    ) -> None:
        req = SubmitPostingRequest(
            event_id="gala", role=Role.SELLER, price=Decimal("45.5"), description=" Row A "
        )
        first, _ = await service.submit(db, "user-1", req)
        second, _ = await service.submit(db, "user-1", req)

        assert first.outcome is SubmitOutcome.CREATED
        assert second.outcome is SubmitOutcome.CREATED
        assert len(posting_repo.rows) == 2
        assert first.posting.price == Decimal("45.50")
        assert first.posting.description == "Row A"

    async def test_unknown_event_rejected(
        self, service: PostingLifecycleService, db: AsyncMock
    ) -> None:
        req = SubmitPostingRequest(event_id="nope", role=Role.BUYER, percent=50)
        with pytest.raises(EventNotFoundError):
            await service.submit(db, "user-1", req)
        db.commit.assert_not_awaited()

    @pytest.mark.parametrize("percent", [-1, 101])
    async def test_percent_out_of_range(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
        percent: int,
    ) -> None:
        with pytest.raises(PercentOutOfRangeError):
            await service.submit(db, "user-1", _ceiling(percent))
        assert posting_repo.rows == {}

    async def test_price_must_be_positive(
        self, service: PostingLifecycleService, db: AsyncMock
    ) -> None:
        req = SubmitPostingRequest(event_id="gala", role=Role.BUYER, price=Decimal("0"))
        with pytest.raises(PriceOutOfRangeError):
            await service.submit(db, "user-1", req)

    @pytest.mark.parametrize("price", [Decimal("1e30"), Decimal("100000000000")])
    async def test_price_beyond_storable_range(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
        price: Decimal,
    ) -> None:
        req = SubmitPostingRequest(event_id="gala", role=Role.SELLER, price=price)
        with pytest.raises(PriceOutOfRangeError):
            await service.submit(db, "user-1", req)
        assert posting_repo.rows == {}
        db.commit.assert_not_awaited()

    async def test_wrong_shape_for_event(
        self, service: PostingLifecycleService, db: AsyncMock
    ) -> None:
        req = SubmitPostingRequest(event_id="trek", role=Role.BUYER, price=Decimal("10"))
        with pytest.raises(InvalidPostingError):
            await service.submit(db, "user-1", req)

    async def test_ticket_limit(self, service: PostingLifecycleService, db: AsyncMock) -> None:
        with pytest.raises(TicketLimitExceededError):
            await service.submit(db, "user-1", _ceiling(80, tickets=2))

    async def test_profile_required(
        self,
        service: PostingLifecycleService,
        profiles: AsyncMock,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
    ) -> None:
        profiles.get.return_value = None
        with pytest.raises(ProfileNotFoundError):
            await service.submit(db, "user-1", _ceiling(80))
        assert posting_repo.rows == {}


class TestWithdraw:
    async def test_owner_withdraws(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
    ) -> None:
        created, _ = await service.submit(db, "user-1", _ceiling(80))

        result, notice = await service.withdraw(db, "user-1", created.posting.id)

        assert result.posting_id == created.posting.id
        assert notice.op is PostingChange.WITHDRAWN
        assert posting_repo.rows == {}

    async def test_other_user_forbidden(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
    ) -> None:
        created, _ = await service.submit(db, "user-1", _ceiling(80))
        with pytest.raises(PostingNotOwnedError):
            await service.withdraw(db, "user-2", created.posting.id)
        assert len(posting_repo.rows) == 1

    async def test_unknown_posting(self, service: PostingLifecycleService, db: AsyncMock) -> None:
        with pytest.raises(PostingNotFoundError):
            await service.withdraw(db, "user-1", "missing")


class TestMarkTraded:
    async def test_removes_posting_and_records_trade(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
    ) -> None:
        created, _ = await service.submit(db, "user-1", _ceiling(75, Role.SELLER))

        result, notice = await service.mark_traded(db, "user-1", created.posting.id)

        assert result.tickets == 1
        assert result.total_traded_tickets == 7
        assert notice.op is PostingChange.TRADED
        assert posting_repo.rows == {}
        [(posting_id, _trade_id, price, tickets)] = posting_repo.traded
        assert posting_id == created.posting.id
        assert price == Decimal("90.00")  # 75% of 120
        assert tickets == 1

    async def test_market_posting_records_its_price(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
    ) -> None:
        req = SubmitPostingRequest(event_id="gala", role=Role.SELLER, price=Decimal("45"))
        created, _ = await service.submit(db, "user-1", req)

        await service.mark_traded(db, "user-1", created.posting.id)

        assert posting_repo.traded[0][2] == Decimal("45.00")

    async def test_failed_removal_records_nothing(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        trades: AsyncMock,
        db: AsyncMock,
    ) -> None:
        created, _ = await service.submit(db, "user-1", _ceiling(75))
        posting_repo.fail_delete_as_traded = True

        with pytest.raises(TradeConsistencyError):
            await service.mark_traded(db, "user-1", created.posting.id)

        assert posting_repo.traded == []
        trades.total_tickets.assert_not_awaited()
        db.rollback.assert_awaited()

    async def test_not_owner(
        self,
        service: PostingLifecycleService,
        db: AsyncMock,
    ) -> None:
        created, _ = await service.submit(db, "user-1", _ceiling(75))
        with pytest.raises(PostingNotOwnedError):
            await service.mark_traded(db, "user-2", created.posting.id)


class TestSyncContact:
    async def test_updates_every_live_posting(
        self,
        service: PostingLifecycleService,
        posting_repo: InMemoryPostingRepository,
        db: AsyncMock,
    ) -> None:
        await service.submit(db, "user-1", _ceiling(80, Role.BUYER))
        await service.submit(db, "user-1", _ceiling(60, Role.SELLER))
        contact = Contact(display_name="Ada King", venmo_handle="ada-k")

        count, notices = await service.sync_contact_fields(db, "user-1", contact)

        assert count == 2
        assert [n.event_id for n in notices] == ["trek"]
        assert notices[0].op is PostingChange.SYNCED
        assert {p.contact.display_name for p in posting_repo.rows.values()} == {"Ada King"}

    async def test_no_postings(self, service: PostingLifecycleService, db: AsyncMock) -> None:
        count, notices = await service.sync_contact_fields(
            db, "user-9", Contact(display_name="Nobody Here")
        )
        assert count == 0
        assert notices == []


class TestReads:
    async def test_unknown_event_lists_nothing(
        self, service: PostingLifecycleService, db: AsyncMock
    ) -> None:
        result = await service.list_postings(db, "nope")
        assert result.items == []

    async def test_list_mine(self, service: PostingLifecycleService, db: AsyncMock) -> None:
        await service.submit(db, "user-1", _ceiling(80))
        result = await service.list_mine(db, "user-1")
        assert len(result.items) == 1
        assert result.items[0].user_id == "user-1"
