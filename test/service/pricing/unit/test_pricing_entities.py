from decimal import Decimal

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.pricing.domain.entity.coupon_redemption_entity import CouponRedemption
from src.service.pricing.domain.enum.discount_type import DiscountType
from src.service.pricing.domain.enum.redemption_status import RedemptionStatus
from src.service.pricing.domain.value_object.rule_condition import (
    DayTypeCondition,
    MalformedCondition,
    PopularityCondition,
    SeatCategoryCondition,
    parse_rule_condition,
)
from test.service.pricing.helpers import make_coupon, make_rule


@pytest.mark.unit
class TestCoupon:
    def test_code_and_payment_method_are_canonical(self) -> None:
        coupon = make_coupon(code='  diwali50 ', payment_method=' wallet ')

        assert coupon.code == 'DIWALI50'
        assert coupon.payment_method == 'WALLET'
        assert coupon.discount_type is DiscountType.PERCENT

    @pytest.mark.parametrize(
        'discount_type,value',
        [('PERCENT', Decimal('100.5')), ('PERCENT', Decimal('-1')), ('FLAT', Decimal('-0.01'))],
    )
    def test_discount_value_bounds(self, discount_type: str, value: Decimal) -> None:
        with pytest.raises(ValueError):
            make_coupon(discount_type=discount_type, discount_value=value)

    def test_usage_left(self) -> None:
        assert make_coupon(max_uses=None, used_count=1000).has_usage_left
        assert make_coupon(max_uses=2, used_count=1).has_usage_left
        assert not make_coupon(max_uses=2, used_count=2).has_usage_left


@pytest.mark.unit
class TestCouponRedemption:
    def test_commit_from_pending(self) -> None:
        redemption = CouponRedemption.begin(coupon_id=1, user_id=2, booking_id='b-1').commit()

        assert redemption.status == RedemptionStatus.COMMITTED
        assert redemption.committed

    def test_abort_carries_reason(self) -> None:
        redemption = CouponRedemption.begin(coupon_id=1, user_id=2).abort(
            reason='coupon usage limit reached', requote_required=True
        )

        assert redemption.status == RedemptionStatus.ABORTED
        assert not redemption.committed
        assert redemption.requote_required

    def test_terminal_states_are_final(self) -> None:
        redemption = CouponRedemption.begin(coupon_id=1, user_id=2).commit()

        with pytest.raises(DomainError):
            redemption.abort(reason='late', requote_required=False)


@pytest.mark.unit
class TestParseRuleCondition:
    def test_well_formed_payloads(self) -> None:
        assert parse_rule_condition(rule_type='DAY_TYPE', payload={'days': [0, 6]}) == (
            DayTypeCondition(days=frozenset({0, 6}))
        )
        assert parse_rule_condition(rule_type='POPULARITY', payload={'minScore': 80}) == (
            PopularityCondition(min_score=80)
        )
        assert parse_rule_condition(
            rule_type='SEAT_CATEGORY', payload={'category': ' Premium '}
        ) == SeatCategoryCondition(category='Premium')

    @pytest.mark.parametrize(
        'rule_type,payload',
        [
            ('DAY_TYPE', {'days': [7]}),
            ('DAY_TYPE', {'days': [True]}),
            ('POPULARITY', {'minScore': 101}),
            ('POPULARITY', None),
            ('SEAT_CATEGORY', {'category': 3}),
            ('SURGE_PRICING', {}),
        ],
    )
    def test_malformed_payloads(self, rule_type: str, payload) -> None:
        assert isinstance(
            parse_rule_condition(rule_type=rule_type, payload=payload), MalformedCondition
        )


@pytest.mark.unit
class TestPricingRule:
    @pytest.mark.parametrize(
        'rule_type,condition,malformed',
        [
            ('DAY_TYPE', {'days': [0, 6]}, False),
            ('DAY_TYPE', {'days': []}, True),
            ('HAPPY_HOUR', {}, True),
        ],
    )
    def test_is_malformed(self, rule_type: str, condition: dict, malformed: bool) -> None:
        rule = make_rule(rule_type=rule_type, condition=condition, flat_discount=Decimal('5'))

        assert rule.is_malformed is malformed
