from abc import ABC, abstractmethod
from typing import Optional

from src.service.pricing.domain.enum.coupon_usage_increment_outcome import (
    CouponUsageIncrementOutcome,
)


class ICouponCommandRepo(ABC):
    @abstractmethod
    async def increment_usage(
        self, *, coupon_id: int, user_id: int, booking_id: Optional[str] = None
    ) -> CouponUsageIncrementOutcome:
        """
        Atomically redeem one use of a coupon for a user

        The global cap (used_count < max_uses), the per-user limit and the increment
        itself must be one atomic conditional operation in the store; on success a
        ledger entry (coupon_id, user_id, booking_id) is recorded in the same unit.

        Returns:
            INCREMENTED on success, otherwise the reason nothing was changed
        """
        pass
