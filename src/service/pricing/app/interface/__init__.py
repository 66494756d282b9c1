"""Pricing Application Interfaces"""

from src.service.pricing.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.pricing.app.interface.i_coupon_command_repo import ICouponCommandRepo
from src.service.pricing.app.interface.i_coupon_query_repo import ICouponQueryRepo
from src.service.pricing.app.interface.i_coupon_redemption_ledger import ICouponRedemptionLedger
from src.service.pricing.app.interface.i_pricing_clock import IPricingClock
from src.service.pricing.app.interface.i_pricing_rule_query_repo import IPricingRuleQueryRepo
from src.service.pricing.app.interface.i_user_membership_query_repo import (
    IUserMembershipQueryRepo,
)

__all__ = [
    'ICatalogQueryRepo',
    'ICouponCommandRepo',
    'ICouponQueryRepo',
    'ICouponRedemptionLedger',
    'IPricingClock',
    'IPricingRuleQueryRepo',
    'IUserMembershipQueryRepo',
]
