from decimal import Decimal
from typing import Optional, Tuple

import attrs

from src.service.pricing.domain.enum.coupon_rejection_reason import CouponRejectionReason
from src.service.pricing.domain.enum.discount_type import DiscountType
from src.service.pricing.domain.enum.membership_tier import MembershipTier


@attrs.frozen
class AppliedRule:
    rule_id: int
    name: str
    rule_type: str
    effect: str  # display text, e.g. "×1.20" or "−₹50.00"
    price_before: Decimal
    price_after: Decimal


@attrs.frozen
class SeatPriceBreakdown:
    seat_id: int
    seat_type: str
    base_price: Decimal
    applied_rules: Tuple[AppliedRule, ...]
    after_rules: Decimal
    membership_discount_percent: Decimal
    membership_discount_amount: Decimal
    after_membership: Decimal
    coupon_discount_amount: Decimal
    after_coupon: Decimal
    final_price: Decimal


@attrs.frozen
class CouponSummary:
    coupon_id: int
    code: str
    discount_type: DiscountType
    discount_value: Decimal
    discount_amount: Decimal


@attrs.frozen
class PricingQuote:
    showtime_id: int
    movie_title: Optional[str]
    seats: Tuple[SeatPriceBreakdown, ...]
    subtotal: Decimal
    coupon: Optional[CouponSummary]
    coupon_error: Optional[CouponRejectionReason]
    coupon_discount: Decimal
    total: Decimal
    membership_tier: MembershipTier
    # Observability only, not part of the quote's identity
    calculation_ms: float = attrs.field(default=0.0, eq=False)
