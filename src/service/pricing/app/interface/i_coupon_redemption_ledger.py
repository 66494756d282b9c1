from abc import ABC, abstractmethod


class ICouponRedemptionLedger(ABC):
    @abstractmethod
    async def count_redemptions(self, *, coupon_id: int, user_id: int) -> int:
        """Number of committed redemptions of the coupon by the user"""
        pass
