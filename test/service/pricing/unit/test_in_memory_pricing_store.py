from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from src.service.pricing.domain.enum.coupon_usage_increment_outcome import (
    CouponUsageIncrementOutcome,
)
from src.service.pricing.driven_adapter.repo.in_memory_pricing_store import InMemoryPricingStore
from test.service.pricing.helpers import make_coupon, make_rule


@pytest.mark.unit
class TestConditionalIncrement:
    def test_threads_never_exceed_max_uses(self) -> None:
        """
        Given: a coupon with maxUses=5
        When: 50 threads try to redeem it at the same time
        Then: exactly 5 succeed and usedCount ends at 5
        """
        store = InMemoryPricingStore(coupons=[make_coupon(max_uses=5)])

        with ThreadPoolExecutor(max_workers=16) as pool:
            outcomes = list(
                pool.map(
                    lambda user_id: store.increment_usage_sync(coupon_id=1, user_id=user_id),
                    range(50),
                )
            )

        assert outcomes.count(CouponUsageIncrementOutcome.INCREMENTED) == 5
        assert outcomes.count(CouponUsageIncrementOutcome.USAGE_LIMIT_REACHED) == 45
        assert store.get_coupon(1).used_count == 5

    def test_per_user_limit_is_enforced_at_commit(self) -> None:
        store = InMemoryPricingStore(coupons=[make_coupon(per_user_limit=2)])

        outcomes = [store.increment_usage_sync(coupon_id=1, user_id=7) for _ in range(3)]

        assert outcomes == [
            CouponUsageIncrementOutcome.INCREMENTED,
            CouponUsageIncrementOutcome.INCREMENTED,
            CouponUsageIncrementOutcome.PER_USER_LIMIT_REACHED,
        ]
        assert store.get_coupon(1).used_count == 2

    @pytest.mark.parametrize(
        'coupons,outcome',
        [
            ([], CouponUsageIncrementOutcome.NOT_FOUND),
            ([make_coupon(is_active=False)], CouponUsageIncrementOutcome.INACTIVE),
        ],
    )
    def test_nothing_changes_on_rejection(self, coupons, outcome) -> None:
        store = InMemoryPricingStore(coupons=coupons)

        assert store.increment_usage_sync(coupon_id=1, user_id=7) == outcome


@pytest.mark.unit
class TestStoreQueries:
    @pytest.mark.asyncio
    async def test_coupon_lookup_is_case_insensitive(self) -> None:
        store = InMemoryPricingStore(coupons=[make_coupon(code='Diwali50')])

        coupon = await store.get_by_code(code=' diwali50')

        assert coupon is not None
        assert coupon.code == 'DIWALI50'

    @pytest.mark.asyncio
    async def test_only_active_rules_are_listed(self) -> None:
        store = InMemoryPricingStore(
            rules=[
                make_rule(1, flat_discount=Decimal('5')),
                make_rule(2, flat_discount=Decimal('5'), is_active=False),
            ]
        )

        assert [rule.id for rule in await store.list_active_rules()] == [1]

    def test_duplicate_code_is_rejected(self) -> None:
        store = InMemoryPricingStore(coupons=[make_coupon(1, code='SAME')])

        with pytest.raises(ValueError):
            store.put_coupon(make_coupon(2, code='same'))
