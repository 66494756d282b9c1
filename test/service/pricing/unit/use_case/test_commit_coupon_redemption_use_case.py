"""
Unit tests for CommitCouponRedemptionUseCase

The store's conditional increment decides; the use case turns its outcome into a
COMMITTED or ABORTED redemption and tells the booking workflow whether to re-quote.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from src.service.pricing.app.command.commit_coupon_redemption_use_case import (
    CommitCouponRedemptionUseCase,
)
from src.service.pricing.domain.enum.coupon_usage_increment_outcome import (
    CouponUsageIncrementOutcome,
)
from src.service.pricing.domain.enum.redemption_status import RedemptionStatus
from src.service.pricing.driven_adapter.repo.in_memory_pricing_store import InMemoryPricingStore
from test.service.pricing.helpers import make_coupon


@pytest.fixture
def mock_coupon_command_repo() -> Mock:
    repo = AsyncMock()
    repo.increment_usage = AsyncMock()
    return repo


@pytest.mark.unit
class TestCommitOutcomes:
    @pytest.mark.asyncio
    async def test_successful_increment_commits(self, mock_coupon_command_repo: Mock) -> None:
        mock_coupon_command_repo.increment_usage.return_value = (
            CouponUsageIncrementOutcome.INCREMENTED
        )
        use_case = CommitCouponRedemptionUseCase(coupon_command_repo=mock_coupon_command_repo)

        redemption = await use_case.commit(coupon_id=1, user_id=2, booking_id='b-9')

        mock_coupon_command_repo.increment_usage.assert_awaited_once_with(
            coupon_id=1, user_id=2, booking_id='b-9'
        )
        assert redemption.status == RedemptionStatus.COMMITTED
        assert redemption.reason is None
        assert not redemption.requote_required

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'outcome',
        [
            CouponUsageIncrementOutcome.USAGE_LIMIT_REACHED,
            CouponUsageIncrementOutcome.PER_USER_LIMIT_REACHED,
            CouponUsageIncrementOutcome.INACTIVE,
            CouponUsageIncrementOutcome.NOT_FOUND,
        ],
    )
    async def test_failed_increment_requires_requote(
        self, mock_coupon_command_repo: Mock, outcome: CouponUsageIncrementOutcome
    ) -> None:
        mock_coupon_command_repo.increment_usage.return_value = outcome
        use_case = CommitCouponRedemptionUseCase(coupon_command_repo=mock_coupon_command_repo)

        redemption = await use_case.commit(coupon_id=1, user_id=2)

        assert redemption.status == RedemptionStatus.ABORTED
        assert redemption.reason == outcome.value
        assert redemption.requote_required

    @pytest.mark.asyncio
    async def test_retried_booking_does_not_requote(self, mock_coupon_command_repo: Mock) -> None:
        mock_coupon_command_repo.increment_usage.return_value = (
            CouponUsageIncrementOutcome.ALREADY_REDEEMED_FOR_BOOKING
        )
        use_case = CommitCouponRedemptionUseCase(coupon_command_repo=mock_coupon_command_repo)

        redemption = await use_case.commit(coupon_id=1, user_id=2, booking_id='b-9')

        assert redemption.status == RedemptionStatus.ABORTED
        assert redemption.reason == 'already redeemed for this booking'
        assert not redemption.requote_required


@pytest.mark.unit
class TestCommitRace:
    @pytest.mark.asyncio
    async def test_last_use_is_redeemed_exactly_once(self) -> None:
        """
        Given: a coupon with maxUses=1 and usedCount=0
        When: two bookings commit it concurrently
        Then: exactly one commits, the other is told the limit was reached, usedCount is 1
        """
        store = InMemoryPricingStore(coupons=[make_coupon(max_uses=1, used_count=0)])
        use_case = CommitCouponRedemptionUseCase(coupon_command_repo=store)

        results = await asyncio.gather(
            use_case.commit(coupon_id=1, user_id=10, booking_id='b-1'),
            use_case.commit(coupon_id=1, user_id=11, booking_id='b-2'),
        )

        committed = [r for r in results if r.committed]
        rejected = [r for r in results if not r.committed]
        assert len(committed) == 1
        assert len(rejected) == 1
        assert rejected[0].reason == 'coupon usage limit reached'
        assert rejected[0].requote_required
        assert store.get_coupon(1).used_count == 1

    @pytest.mark.asyncio
    async def test_same_booking_is_counted_once(self) -> None:
        store = InMemoryPricingStore(coupons=[make_coupon(max_uses=10)])
        use_case = CommitCouponRedemptionUseCase(coupon_command_repo=store)

        first = await use_case.commit(coupon_id=1, user_id=10, booking_id='b-1')
        retry = await use_case.commit(coupon_id=1, user_id=10, booking_id='b-1')

        assert first.committed
        assert not retry.committed
        assert store.get_coupon(1).used_count == 1
        assert await store.count_redemptions(coupon_id=1, user_id=10) == 1
