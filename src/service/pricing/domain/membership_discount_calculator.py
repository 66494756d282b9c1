from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional

import attrs

from src.service.pricing.domain.enum.membership_tier import MembershipTier
from src.service.pricing.domain.value_object.money import clamp_non_negative, to_money


DEFAULT_MEMBERSHIP_DISCOUNT_PERCENT: Mapping[MembershipTier, Decimal] = MappingProxyType(
    {
        MembershipTier.NONE: Decimal('0'),
        MembershipTier.SILVER: Decimal('5'),
        MembershipTier.GOLD: Decimal('10'),
        MembershipTier.PLATINUM: Decimal('15'),
    }
)


@attrs.frozen
class MembershipDiscount:
    percent: Decimal
    amount: Decimal
    after_membership: Decimal


class MembershipDiscountCalculator:
    def __init__(
        self, *, discount_percent_by_tier: Optional[Mapping[str, Decimal]] = None
    ) -> None:
        table = dict(DEFAULT_MEMBERSHIP_DISCOUNT_PERCENT)
        for tier, percent in (discount_percent_by_tier or {}).items():
            percent = Decimal(percent)
            if not Decimal('0') <= percent <= Decimal('100'):
                raise ValueError(f'membership discount for {tier} must be within 0..100')
            table[MembershipTier(tier)] = percent
        self._percent_by_tier: Mapping[MembershipTier, Decimal] = MappingProxyType(table)

    def percent_for(self, tier: MembershipTier) -> Decimal:
        return self._percent_by_tier.get(tier, Decimal('0'))

    def apply(self, *, price: Decimal, tier: MembershipTier) -> MembershipDiscount:
        percent = self.percent_for(tier)
        amount = to_money(price * percent / Decimal('100'))
        return MembershipDiscount(
            percent=percent,
            amount=amount,
            after_membership=clamp_non_negative(to_money(price - amount)),
        )
