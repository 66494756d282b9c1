from enum import StrEnum


class CouponUsageIncrementOutcome(StrEnum):
    """Result of the store's atomic conditional usage increment"""

    INCREMENTED = 'incremented'
    NOT_FOUND = 'coupon not found'
    INACTIVE = 'coupon is inactive'
    USAGE_LIMIT_REACHED = 'coupon usage limit reached'
    PER_USER_LIMIT_REACHED = 'per-user redemption limit reached'
    ALREADY_REDEEMED_FOR_BOOKING = 'already redeemed for this booking'
