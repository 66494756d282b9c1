from decimal import Decimal

import pytest

from src.service.pricing.domain.enum.membership_tier import MembershipTier
from src.service.pricing.domain.membership_discount_calculator import (
    MembershipDiscountCalculator,
)


@pytest.mark.unit
class TestMembershipDiscountCalculator:
    def test_gold_member_stacks_on_rule_price(self) -> None:
        """
        Given: afterRules 180 and tier GOLD (10%)
        When: the membership discount is applied
        Then: the discount is 18 and afterMembership is 162
        """
        result = MembershipDiscountCalculator().apply(
            price=Decimal('180'), tier=MembershipTier.GOLD
        )

        assert result.percent == Decimal('10')
        assert result.amount == Decimal('18.00')
        assert result.after_membership == Decimal('162.00')

    @pytest.mark.parametrize(
        'tier,percent',
        [
            (MembershipTier.NONE, Decimal('0')),
            (MembershipTier.SILVER, Decimal('5')),
            (MembershipTier.GOLD, Decimal('10')),
            (MembershipTier.PLATINUM, Decimal('15')),
        ],
    )
    def test_default_table(self, tier: MembershipTier, percent: Decimal) -> None:
        assert MembershipDiscountCalculator().percent_for(tier) == percent

    def test_discount_amount_is_rounded_half_up(self) -> None:
        # 5% of 99.90 = 4.995
        result = MembershipDiscountCalculator().apply(
            price=Decimal('99.90'), tier=MembershipTier.SILVER
        )

        assert result.amount == Decimal('5.00')
        assert result.after_membership == Decimal('94.90')

    def test_table_is_injectable(self) -> None:
        calculator = MembershipDiscountCalculator(
            discount_percent_by_tier={'GOLD': Decimal('20'), 'SILVER': Decimal('7.5')}
        )

        assert calculator.percent_for(MembershipTier.GOLD) == Decimal('20')
        assert calculator.percent_for(MembershipTier.SILVER) == Decimal('7.5')
        # Tiers not overridden keep their defaults
        assert calculator.percent_for(MembershipTier.PLATINUM) == Decimal('15')

    @pytest.mark.parametrize('percent', [Decimal('-1'), Decimal('100.01')])
    def test_out_of_range_percent_is_rejected(self, percent: Decimal) -> None:
        with pytest.raises(ValueError):
            MembershipDiscountCalculator(discount_percent_by_tier={'GOLD': percent})

    def test_unknown_tier_in_table_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            MembershipDiscountCalculator(discount_percent_by_tier={'DIAMOND': Decimal('20')})

    def test_zero_price_stays_zero(self) -> None:
        result = MembershipDiscountCalculator().apply(
            price=Decimal('0'), tier=MembershipTier.PLATINUM
        )

        assert result.amount == Decimal('0.00')
        assert result.after_membership == Decimal('0.00')
