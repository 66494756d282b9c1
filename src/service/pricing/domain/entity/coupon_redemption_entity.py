from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.pricing.domain.enum.redemption_status import RedemptionStatus


@attrs.define
class CouponRedemption:
    """
    One commit attempt of a coupon for a completed booking.

    PENDING → COMMITTED | ABORTED. An aborted redemption tells the booking workflow
    whether it has to re-quote without the coupon (`requote_required`).
    """

    coupon_id: int
    user_id: int
    booking_id: Optional[str] = None
    status: RedemptionStatus = RedemptionStatus.PENDING
    reason: Optional[str] = None
    requote_required: bool = False

    @classmethod
    def begin(
        cls, *, coupon_id: int, user_id: int, booking_id: Optional[str] = None
    ) -> 'CouponRedemption':
        return cls(coupon_id=coupon_id, user_id=user_id, booking_id=booking_id)

    @property
    def committed(self) -> bool:
        return self.status == RedemptionStatus.COMMITTED

    def _ensure_pending(self) -> None:
        if self.status != RedemptionStatus.PENDING:
            raise DomainError(f'Redemption already {self.status}')

    def commit(self) -> 'CouponRedemption':
        self._ensure_pending()
        self.status = RedemptionStatus.COMMITTED
        return self

    def abort(self, *, reason: str, requote_required: bool) -> 'CouponRedemption':
        self._ensure_pending()
        self.status = RedemptionStatus.ABORTED
        self.reason = reason
        self.requote_required = requote_required
        return self
