"""Pricing Domain Enums"""

from src.service.pricing.domain.enum.coupon_rejection_reason import CouponRejectionReason
from src.service.pricing.domain.enum.coupon_usage_increment_outcome import (
    CouponUsageIncrementOutcome,
)
from src.service.pricing.domain.enum.discount_type import DiscountType
from src.service.pricing.domain.enum.membership_tier import MembershipTier
from src.service.pricing.domain.enum.redemption_status import RedemptionStatus
from src.service.pricing.domain.enum.rule_type import RuleType
from src.service.pricing.domain.enum.seat_category_match_policy import SeatCategoryMatchPolicy

__all__ = [
    'CouponRejectionReason',
    'CouponUsageIncrementOutcome',
    'DiscountType',
    'MembershipTier',
    'RedemptionStatus',
    'RuleType',
    'SeatCategoryMatchPolicy',
]
