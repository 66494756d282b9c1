"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.pricing.app.command import commit_coupon_redemption_use_case
from src.service.pricing.app.query import get_pricing_quote_use_case
from src.service.pricing.driving_adapter.http_controller.auth import optional_auth


WIRE_MODULES: list[ModuleType] = [
    get_pricing_quote_use_case,
    commit_coupon_redemption_use_case,
    optional_auth,
]
