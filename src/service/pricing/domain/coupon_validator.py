"""
Coupon Validator

Pure coupon validation against an order. Every check is evaluated so all failing
reasons reach the log, but only the first one (in check order) is surfaced:

    1. exists / active          6. movie scope
    2. validity window          7. showtime scope
    3. minimum order value      8. seat category scope
    4. global usage cap         9. payment method scope
    5. per-user limit          10. theater ownership scope

The usage checks here are advisory: the authoritative check is the atomic
increment at commit time.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple, Union

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.pricing.domain.coupon_discount_distributor import distribute_proportionally
from src.service.pricing.domain.entity.coupon_entity import Coupon
from src.service.pricing.domain.enum.coupon_rejection_reason import CouponRejectionReason
from src.service.pricing.domain.enum.discount_type import DiscountType
from src.service.pricing.domain.enum.seat_category_match_policy import SeatCategoryMatchPolicy
from src.service.pricing.domain.value_object.money import to_money


@attrs.frozen
class CouponOrderContext:
    seat_types: Tuple[str, ...]
    # Per-seat price after membership, same order as seat_types
    seat_amounts: Tuple[Decimal, ...]
    showtime_id: int
    movie_id: int
    today: date
    user_id: Optional[int] = None
    prior_redemptions: int = 0
    payment_method: Optional[str] = None
    theater_owner_id: Optional[int] = None

    @property
    def subtotal(self) -> Decimal:
        return to_money(sum(self.seat_amounts, Decimal('0')))


@attrs.frozen
class CouponAccepted:
    coupon: Coupon
    discount_amount: Decimal
    # Per-seat share of discount_amount, same order as the order's seats
    distribution: Tuple[Decimal, ...]


@attrs.frozen
class CouponRejected:
    reason: CouponRejectionReason
    failed_checks: Tuple[CouponRejectionReason, ...] = ()


CouponValidationResult = Union[CouponAccepted, CouponRejected]


class CouponValidator:
    def __init__(
        self, *, seat_category_match: SeatCategoryMatchPolicy = SeatCategoryMatchPolicy.ANY
    ) -> None:
        self.seat_category_match = SeatCategoryMatchPolicy(seat_category_match)

    def validate(
        self, *, coupon: Optional[Coupon], order: CouponOrderContext
    ) -> CouponValidationResult:
        if coupon is None:
            return CouponRejected(
                reason=CouponRejectionReason.NOT_FOUND,
                failed_checks=(CouponRejectionReason.NOT_FOUND,),
            )

        failed = self.failed_checks(coupon=coupon, order=order)
        if failed:
            Logger.base.info(
                f'🎟️ [COUPON] {coupon.code} rejected for showtime {order.showtime_id}: '
                f'{", ".join(failed)}'
            )
            return CouponRejected(reason=failed[0], failed_checks=tuple(failed))

        discount_amount = self.discount_amount(coupon=coupon, subtotal=order.subtotal)
        return CouponAccepted(
            coupon=coupon,
            discount_amount=discount_amount,
            distribution=distribute_proportionally(
                total=discount_amount, weights=order.seat_amounts
            ),
        )

    def failed_checks(
        self, *, coupon: Coupon, order: CouponOrderContext
    ) -> List[CouponRejectionReason]:
        failed: List[CouponRejectionReason] = []

        if not coupon.is_active:
            failed.append(CouponRejectionReason.INACTIVE)

        if coupon.valid_from is not None and order.today < coupon.valid_from:
            failed.append(CouponRejectionReason.NOT_YET_VALID)
        if coupon.expires_at is not None and order.today > coupon.expires_at:
            failed.append(CouponRejectionReason.EXPIRED)

        if order.subtotal < coupon.min_order_value:
            failed.append(CouponRejectionReason.MIN_ORDER_VALUE_NOT_MET)

        if not coupon.has_usage_left:
            failed.append(CouponRejectionReason.USAGE_LIMIT_REACHED)

        if coupon.per_user_limit is not None:
            if order.user_id is None:
                failed.append(CouponRejectionReason.LOGIN_REQUIRED)
            elif not coupon.user_has_redemptions_left(order.prior_redemptions):
                failed.append(CouponRejectionReason.PER_USER_LIMIT_REACHED)

        if coupon.movie_id is not None and coupon.movie_id != order.movie_id:
            failed.append(CouponRejectionReason.MOVIE_MISMATCH)

        if coupon.showtime_id is not None and coupon.showtime_id != order.showtime_id:
            failed.append(CouponRejectionReason.SHOWTIME_MISMATCH)

        if coupon.seat_category is not None and not self._seat_category_qualifies(
            coupon=coupon, seat_types=order.seat_types
        ):
            failed.append(CouponRejectionReason.SEAT_CATEGORY_MISMATCH)

        if coupon.payment_method is not None and coupon.payment_method != _normalize_method(
            order.payment_method
        ):
            failed.append(CouponRejectionReason.PAYMENT_METHOD_MISMATCH)

        if not coupon.applies_to_theater_of(order.theater_owner_id):
            failed.append(CouponRejectionReason.THEATER_MISMATCH)

        return failed

    @staticmethod
    def discount_amount(*, coupon: Coupon, subtotal: Decimal) -> Decimal:
        if coupon.discount_type is DiscountType.PERCENT:
            amount = to_money(subtotal * coupon.discount_value / Decimal('100'))
        else:
            amount = to_money(coupon.discount_value)
        return min(amount, to_money(subtotal))

    def _seat_category_qualifies(self, *, coupon: Coupon, seat_types: Tuple[str, ...]) -> bool:
        matches = [coupon.applies_to_seat_type(seat_type) for seat_type in seat_types]
        if self.seat_category_match is SeatCategoryMatchPolicy.ALL:
            return bool(matches) and all(matches)
        return any(matches)


def _normalize_method(payment_method: Optional[str]) -> Optional[str]:
    if payment_method is None:
        return None
    return payment_method.strip().upper() or None
