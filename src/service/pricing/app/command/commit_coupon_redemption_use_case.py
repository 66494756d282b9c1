"""
Coupon Redemption Commit Use Case

Called once by the booking workflow after a booking completes. The store's atomic
conditional increment is the only place usage limits are actually enforced.
"""

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.pricing_metrics import metrics
from src.service.pricing.app.interface import ICouponCommandRepo
from src.service.pricing.domain.entity.coupon_redemption_entity import CouponRedemption
from src.service.pricing.domain.enum.coupon_usage_increment_outcome import (
    CouponUsageIncrementOutcome,
)


class CommitCouponRedemptionUseCase:
    def __init__(self, *, coupon_command_repo: ICouponCommandRepo) -> None:
        self.coupon_command_repo = coupon_command_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        coupon_command_repo: ICouponCommandRepo = Depends(
            Provide[Container.coupon_command_repo]
        ),
    ) -> Self:
        return cls(coupon_command_repo=coupon_command_repo)

    @Logger.io
    async def commit(
        self, *, coupon_id: int, user_id: int, booking_id: Optional[str] = None
    ) -> CouponRedemption:
        """
        Redeem one use of a coupon for a completed booking

        Args:
            coupon_id: Coupon quoted for the booking
            user_id: Booking owner
            booking_id: Booking reference, makes retries of the same booking idempotent

        Returns:
            CouponRedemption, COMMITTED or ABORTED. An aborted redemption with
            `requote_required` means the booking must be priced again without the coupon.
        """
        with self.tracer.start_as_current_span(
            'use_case.commit_coupon_redemption',
            attributes={'coupon.id': coupon_id, 'user.id': user_id},
        ) as span:
            redemption = CouponRedemption.begin(
                coupon_id=coupon_id, user_id=user_id, booking_id=booking_id
            )
            outcome = await self.coupon_command_repo.increment_usage(
                coupon_id=coupon_id, user_id=user_id, booking_id=booking_id
            )
            span.set_attribute('redemption.outcome', outcome.name)
            metrics.record_redemption_commit(outcome=outcome.name.lower())

            if outcome is CouponUsageIncrementOutcome.INCREMENTED:
                Logger.base.info(
                    f'🎟️ [REDEMPTION] coupon {coupon_id} committed for user {user_id}'
                    f' (booking {booking_id})'
                )
                return redemption.commit()

            # The booking already holds this redemption, its quote stays valid
            requote_required = (
                outcome is not CouponUsageIncrementOutcome.ALREADY_REDEEMED_FOR_BOOKING
            )
            Logger.base.warning(
                f'⚠️ [REDEMPTION] coupon {coupon_id} not committed for user {user_id}: '
                f'{outcome}'
            )
            return redemption.abort(reason=outcome.value, requote_required=requote_required)
