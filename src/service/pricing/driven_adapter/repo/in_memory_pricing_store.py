"""
In-memory rule/coupon store

Backs PRICING_STORE_BACKEND=memory (local runs and tests). Same contracts as the
PostgreSQL adapters; the conditional increment runs as one critical section under a lock,
so concurrent commits (threads or tasks) can never both take the last use of a coupon.
"""

import threading
from typing import Dict, Iterable, List, Optional

import attrs

from src.service.pricing.app.interface.i_coupon_command_repo import ICouponCommandRepo
from src.service.pricing.app.interface.i_coupon_query_repo import ICouponQueryRepo
from src.service.pricing.app.interface.i_coupon_redemption_ledger import ICouponRedemptionLedger
from src.service.pricing.app.interface.i_pricing_rule_query_repo import IPricingRuleQueryRepo
from src.service.pricing.domain.entity.coupon_entity import Coupon, canonical_coupon_code
from src.service.pricing.domain.entity.pricing_rule_entity import PricingRule
from src.service.pricing.domain.enum.coupon_usage_increment_outcome import (
    CouponUsageIncrementOutcome,
)


@attrs.frozen
class CouponUsageRecord:
    coupon_id: int
    user_id: int
    booking_id: Optional[str] = None


class InMemoryPricingStore(
    IPricingRuleQueryRepo, ICouponQueryRepo, ICouponCommandRepo, ICouponRedemptionLedger
):
    def __init__(
        self,
        *,
        rules: Iterable[PricingRule] = (),
        coupons: Iterable[Coupon] = (),
    ) -> None:
        self._lock = threading.Lock()
        self._rules: Dict[int, PricingRule] = {}
        self._coupons: Dict[int, Coupon] = {}
        self._usages: List[CouponUsageRecord] = []
        for rule in rules:
            self.put_rule(rule)
        for coupon in coupons:
            self.put_coupon(coupon)

    # ========== Seeding (admin side) ==========

    def put_rule(self, rule: PricingRule) -> None:
        with self._lock:
            self._rules[rule.id] = rule

    def put_coupon(self, coupon: Coupon) -> None:
        with self._lock:
            for existing in self._coupons.values():
                if existing.code == coupon.code and existing.id != coupon.id:
                    raise ValueError(f'Coupon code {coupon.code} already exists')
            self._coupons[coupon.id] = coupon

    def get_coupon(self, coupon_id: int) -> Optional[Coupon]:
        with self._lock:
            return self._coupons.get(coupon_id)

    def clear(self) -> None:
        with self._lock:
            self._rules.clear()
            self._coupons.clear()
            self._usages.clear()

    # ========== Queries ==========

    async def list_active_rules(self) -> List[PricingRule]:
        with self._lock:
            return [rule for rule in self._rules.values() if rule.is_active]

    async def get_by_code(self, *, code: str) -> Optional[Coupon]:
        canonical = canonical_coupon_code(code)
        with self._lock:
            for coupon in self._coupons.values():
                if coupon.code == canonical:
                    return coupon
            return None

    async def count_redemptions(self, *, coupon_id: int, user_id: int) -> int:
        with self._lock:
            return self._count_locked(coupon_id=coupon_id, user_id=user_id)

    # ========== Commands ==========

    async def increment_usage(
        self, *, coupon_id: int, user_id: int, booking_id: Optional[str] = None
    ) -> CouponUsageIncrementOutcome:
        return self.increment_usage_sync(
            coupon_id=coupon_id, user_id=user_id, booking_id=booking_id
        )

    def increment_usage_sync(
        self, *, coupon_id: int, user_id: int, booking_id: Optional[str] = None
    ) -> CouponUsageIncrementOutcome:
        with self._lock:
            coupon = self._coupons.get(coupon_id)
            if coupon is None:
                return CouponUsageIncrementOutcome.NOT_FOUND
            if booking_id is not None and any(
                usage.coupon_id == coupon_id and usage.booking_id == booking_id
                for usage in self._usages
            ):
                return CouponUsageIncrementOutcome.ALREADY_REDEEMED_FOR_BOOKING
            if not coupon.is_active:
                return CouponUsageIncrementOutcome.INACTIVE
            if not coupon.has_usage_left:
                return CouponUsageIncrementOutcome.USAGE_LIMIT_REACHED
            if not coupon.user_has_redemptions_left(
                self._count_locked(coupon_id=coupon_id, user_id=user_id)
            ):
                return CouponUsageIncrementOutcome.PER_USER_LIMIT_REACHED

            self._coupons[coupon_id] = attrs.evolve(coupon, used_count=coupon.used_count + 1)
            self._usages.append(
                CouponUsageRecord(coupon_id=coupon_id, user_id=user_id, booking_id=booking_id)
            )
            return CouponUsageIncrementOutcome.INCREMENTED

    def _count_locked(self, *, coupon_id: int, user_id: int) -> int:
        return sum(
            1
            for usage in self._usages
            if usage.coupon_id == coupon_id and usage.user_id == user_id
        )
