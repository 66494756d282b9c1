from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from src.service.pricing.domain.entity.pricing_quote_entity import (
    AppliedRule,
    PricingQuote,
    SeatPriceBreakdown,
)


# Amounts stay Decimal internally and become JSON numbers at the boundary
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used='json')]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AppliedRuleResponse(CamelModel):
    rule_id: int
    name: str
    rule_type: str
    effect: str

    @classmethod
    def from_entity(cls, rule: AppliedRule) -> 'AppliedRuleResponse':
        return cls(
            rule_id=rule.rule_id, name=rule.name, rule_type=rule.rule_type, effect=rule.effect
        )


class SeatPriceBreakdownResponse(CamelModel):
    seat_id: int
    seat_type: str
    base_price: Money
    applied_rules: List[AppliedRuleResponse]
    after_rules: Money
    membership_discount_percent: Money
    membership_discount_amount: Money
    after_membership: Money
    coupon_discount_amount: Money
    after_coupon: Money
    final_price: Money

    @classmethod
    def from_entity(cls, seat: SeatPriceBreakdown) -> 'SeatPriceBreakdownResponse':
        return cls(
            seat_id=seat.seat_id,
            seat_type=seat.seat_type,
            base_price=seat.base_price,
            applied_rules=[AppliedRuleResponse.from_entity(r) for r in seat.applied_rules],
            after_rules=seat.after_rules,
            membership_discount_percent=seat.membership_discount_percent,
            membership_discount_amount=seat.membership_discount_amount,
            after_membership=seat.after_membership,
            coupon_discount_amount=seat.coupon_discount_amount,
            after_coupon=seat.after_coupon,
            final_price=seat.final_price,
        )


class CouponSummaryResponse(CamelModel):
    code: str
    discount_type: str
    discount_value: Money
    discount_amount: Money


class PricingQuoteResponse(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'showtimeId': 12,
                'movie': 'Interstellar',
                'seats': [
                    {
                        'seatId': 101,
                        'seatType': 'Premium',
                        'basePrice': 150.0,
                        'appliedRules': [
                            {
                                'ruleId': 3,
                                'name': 'Weekend',
                                'ruleType': 'DAY_TYPE',
                                'effect': '×1.20',
                            }
                        ],
                        'afterRules': 180.0,
                        'membershipDiscountPercent': 10.0,
                        'membershipDiscountAmount': 18.0,
                        'afterMembership': 162.0,
                        'couponDiscountAmount': 0.0,
                        'afterCoupon': 162.0,
                        'finalPrice': 162.0,
                    }
                ],
                'subtotal': 162.0,
                'coupon': None,
                'couponError': 'minimum order value not met',
                'couponDiscount': 0.0,
                'total': 162.0,
                'membershipTier': 'GOLD',
                'calculationMs': 1.8,
            }
        },
    )

    showtime_id: int
    movie: Optional[str] = None
    seats: List[SeatPriceBreakdownResponse]
    subtotal: Money
    coupon: Optional[CouponSummaryResponse] = None
    coupon_error: Optional[str] = None
    coupon_discount: Money
    total: Money
    membership_tier: str
    calculation_ms: float

    @classmethod
    def from_entity(cls, quote: PricingQuote) -> 'PricingQuoteResponse':
        coupon = None
        if quote.coupon is not None:
            coupon = CouponSummaryResponse(
                code=quote.coupon.code,
                discount_type=quote.coupon.discount_type,
                discount_value=quote.coupon.discount_value,
                discount_amount=quote.coupon.discount_amount,
            )
        return cls(
            showtime_id=quote.showtime_id,
            movie=quote.movie_title,
            seats=[SeatPriceBreakdownResponse.from_entity(seat) for seat in quote.seats],
            subtotal=quote.subtotal,
            coupon=coupon,
            coupon_error=quote.coupon_error,
            coupon_discount=quote.coupon_discount,
            total=quote.total,
            membership_tier=quote.membership_tier,
            calculation_ms=round(quote.calculation_ms, 3),
        )


class CouponRedemptionRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={'example': {'couponId': 7, 'userId': 42, 'bookingId': '1893'}},
    )

    coupon_id: int = Field(gt=0)
    user_id: int = Field(gt=0)
    booking_id: Optional[str] = None


class CouponRedemptionResponse(CamelModel):
    committed: bool
    reason: Optional[str] = None
    requote_required: bool = False
