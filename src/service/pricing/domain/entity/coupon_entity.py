from datetime import date
from decimal import Decimal
from typing import Optional

import attrs

from src.service.pricing.domain.enum.discount_type import DiscountType


def canonical_coupon_code(code: str) -> str:
    return code.strip().upper()


def _optional_upper(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip().upper() or None


@attrs.frozen
class Coupon:
    id: int
    code: str = attrs.field(converter=canonical_coupon_code)
    discount_type: DiscountType = attrs.field(converter=DiscountType)
    discount_value: Decimal = attrs.field()
    max_uses: Optional[int] = None
    used_count: int = 0
    per_user_limit: Optional[int] = None
    min_order_value: Decimal = Decimal('0')
    valid_from: Optional[date] = None
    expires_at: Optional[date] = None
    # Scope restrictions, each optional and AND-ed
    movie_id: Optional[int] = None
    showtime_id: Optional[int] = None
    seat_category: Optional[str] = None
    payment_method: Optional[str] = attrs.field(default=None, converter=_optional_upper)
    # Issuer: super-admin coupons apply everywhere, admin coupons only at the admin's theaters
    created_by: Optional[int] = None
    issued_by_super_admin: bool = False
    is_active: bool = True

    @discount_value.validator
    def _check_discount_value(self, attribute: attrs.Attribute, value: Decimal) -> None:
        if value < 0:
            raise ValueError('discount_value must not be negative')
        if self.discount_type is DiscountType.PERCENT and value > 100:
            raise ValueError('percent discount_value must be within 0..100')

    @property
    def has_usage_left(self) -> bool:
        return self.max_uses is None or self.used_count < self.max_uses

    def user_has_redemptions_left(self, prior_redemptions: int) -> bool:
        return self.per_user_limit is None or prior_redemptions < self.per_user_limit

    def applies_to_seat_type(self, seat_type: str) -> bool:
        return self.seat_category is None or (
            seat_type.strip().lower() == self.seat_category.strip().lower()
        )

    def applies_to_theater_of(self, theater_owner_id: Optional[int]) -> bool:
        if self.issued_by_super_admin or self.created_by is None:
            return True
        return theater_owner_id is not None and theater_owner_id == self.created_by
