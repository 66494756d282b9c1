"""
Read-through caches for pricing rules and coupons

Rules and coupons change rarely, so quote reads are served from memory for a short TTL.
The cached coupon's used_count is advisory only: commits always go to the store.
Admin writes call `invalidate()`.
"""

import time
from typing import Callable, Dict, List, Optional, TypedDict

from opentelemetry import trace

from src.service.pricing.app.interface.i_coupon_query_repo import ICouponQueryRepo
from src.service.pricing.app.interface.i_pricing_rule_query_repo import IPricingRuleQueryRepo
from src.service.pricing.domain.entity.coupon_entity import Coupon, canonical_coupon_code
from src.service.pricing.domain.entity.pricing_rule_entity import PricingRule


class RulesCacheEntry(TypedDict):
    data: List[PricingRule]
    timestamp: float


class CouponCacheEntry(TypedDict):
    data: Coupon
    timestamp: float


class CachedPricingRuleQueryRepo(IPricingRuleQueryRepo):
    def __init__(
        self,
        *,
        inner: IPricingRuleQueryRepo,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._inner = inner
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: Optional[RulesCacheEntry] = None
        self._tracer = trace.get_tracer(__name__)

    def _is_expired(self, *, entry: RulesCacheEntry) -> bool:
        return self._clock() - entry['timestamp'] > self._ttl_seconds

    async def list_active_rules(self) -> List[PricingRule]:
        with self._tracer.start_as_current_span('cache.list_active_rules') as span:
            entry = self._entry
            if entry is not None and not self._is_expired(entry=entry):
                span.set_attribute('cache_hit', True)
                return list(entry['data'])

            span.set_attribute('cache_hit', False)
            rules = await self._inner.list_active_rules()
            self._entry = {'data': list(rules), 'timestamp': self._clock()}
            return list(rules)

    def invalidate(self) -> None:
        self._entry = None


class CachedCouponQueryRepo(ICouponQueryRepo):
    """Only found coupons are cached; an unknown code is looked up again every time"""

    def __init__(
        self,
        *,
        inner: ICouponQueryRepo,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._inner = inner
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        # Cache key: canonical code → CouponCacheEntry
        self._cache: Dict[str, CouponCacheEntry] = {}
        self._tracer = trace.get_tracer(__name__)

    def _is_expired(self, *, entry: CouponCacheEntry) -> bool:
        return self._clock() - entry['timestamp'] > self._ttl_seconds

    async def get_by_code(self, *, code: str) -> Optional[Coupon]:
        canonical = canonical_coupon_code(code)
        with self._tracer.start_as_current_span(
            'cache.get_coupon_by_code', attributes={'coupon.code': canonical}
        ) as span:
            entry = self._cache.get(canonical)
            if entry is not None and not self._is_expired(entry=entry):
                span.set_attribute('cache_hit', True)
                return entry['data']

            span.set_attribute('cache_hit', False)
            coupon = await self._inner.get_by_code(code=canonical)
            if coupon is None:
                self._cache.pop(canonical, None)
            else:
                self._cache[canonical] = {'data': coupon, 'timestamp': self._clock()}
            return coupon

    def invalidate(self, *, code: Optional[str] = None) -> None:
        if code is None:
            self._cache.clear()
        else:
            self._cache.pop(canonical_coupon_code(code), None)
