from enum import StrEnum


class CouponRejectionReason(StrEnum):
    """Quote-time coupon rejections, surfaced to the caller as `couponError`"""

    NOT_FOUND = 'invalid coupon code'
    INACTIVE = 'coupon is inactive'
    NOT_YET_VALID = 'coupon is not yet valid'
    EXPIRED = 'coupon has expired'
    MIN_ORDER_VALUE_NOT_MET = 'minimum order value not met'
    USAGE_LIMIT_REACHED = 'coupon usage limit reached'
    LOGIN_REQUIRED = 'login required to use this coupon'
    PER_USER_LIMIT_REACHED = 'per-user redemption limit reached'
    MOVIE_MISMATCH = 'coupon not valid for this movie'
    SHOWTIME_MISMATCH = 'coupon not valid for this showtime'
    SEAT_CATEGORY_MISMATCH = 'coupon not valid for the selected seat category'
    PAYMENT_METHOD_MISMATCH = 'coupon not valid for this payment method'
    THEATER_MISMATCH = 'coupon not valid at this theater'
