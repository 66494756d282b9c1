"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.pricing.domain.coupon_validator import CouponValidator
from src.service.pricing.domain.membership_discount_calculator import MembershipDiscountCalculator
from src.service.pricing.domain.rule_evaluator import RuleEvaluator
from src.service.pricing.driven_adapter.cache.pricing_read_through_cache import (
    CachedCouponQueryRepo,
    CachedPricingRuleQueryRepo,
)
from src.service.pricing.driven_adapter.clock.zoned_pricing_clock import ZonedPricingClock
from src.service.pricing.driven_adapter.repo.catalog_query_repo_impl import CatalogQueryRepoImpl
from src.service.pricing.driven_adapter.repo.coupon_command_repo_impl import CouponCommandRepoImpl
from src.service.pricing.driven_adapter.repo.coupon_query_repo_impl import CouponQueryRepoImpl
from src.service.pricing.driven_adapter.repo.coupon_redemption_ledger_impl import (
    CouponRedemptionLedgerImpl,
)
from src.service.pricing.driven_adapter.repo.in_memory_catalog_query_repo import (
    InMemoryCatalogQueryRepo,
    InMemoryUserMembershipQueryRepo,
)
from src.service.pricing.driven_adapter.repo.in_memory_pricing_store import InMemoryPricingStore
from src.service.pricing.driven_adapter.repo.pricing_rule_query_repo_impl import (
    PricingRuleQueryRepoImpl,
)
from src.service.pricing.driven_adapter.repo.user_membership_query_repo_impl import (
    UserMembershipQueryRepoImpl,
)
from src.service.pricing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Store backend: "postgres" (asyncpg) or "memory" (local runs / tests)
    store_backend = config_service.provided.PRICING_STORE_BACKEND

    # In-memory backend: one store serves rules, coupons, commits and the ledger
    in_memory_pricing_store = providers.Singleton(InMemoryPricingStore)
    in_memory_catalog_query_repo = providers.Singleton(InMemoryCatalogQueryRepo)
    in_memory_user_membership_query_repo = providers.Singleton(InMemoryUserMembershipQueryRepo)

    # Repositories (stateless - acquire a pooled connection per call)
    catalog_query_repo = providers.Selector(
        store_backend,
        postgres=providers.Singleton(CatalogQueryRepoImpl),
        memory=in_memory_catalog_query_repo,
    )
    user_membership_query_repo = providers.Selector(
        store_backend,
        postgres=providers.Singleton(UserMembershipQueryRepoImpl),
        memory=in_memory_user_membership_query_repo,
    )
    pricing_rule_store = providers.Selector(
        store_backend,
        postgres=providers.Singleton(PricingRuleQueryRepoImpl),
        memory=in_memory_pricing_store,
    )
    coupon_store = providers.Selector(
        store_backend,
        postgres=providers.Singleton(CouponQueryRepoImpl),
        memory=in_memory_pricing_store,
    )
    coupon_command_repo = providers.Selector(
        store_backend,
        postgres=providers.Singleton(CouponCommandRepoImpl),
        memory=in_memory_pricing_store,
    )
    coupon_redemption_ledger = providers.Selector(
        store_backend,
        postgres=providers.Singleton(CouponRedemptionLedgerImpl),
        memory=in_memory_pricing_store,
    )

    # Read-through caches (Singleton for cache)
    pricing_rule_query_repo = providers.Singleton(
        CachedPricingRuleQueryRepo,
        inner=pricing_rule_store,
        ttl_seconds=config_service.provided.PRICING_CACHE_TTL_SECONDS,
    )
    coupon_query_repo = providers.Singleton(
        CachedCouponQueryRepo,
        inner=coupon_store,
        ttl_seconds=config_service.provided.PRICING_CACHE_TTL_SECONDS,
    )

    # Pure pricing components
    pricing_clock = providers.Singleton(
        ZonedPricingClock, timezone=config_service.provided.PRICING_TIMEZONE
    )
    rule_evaluator = providers.Singleton(
        RuleEvaluator, currency_symbol=config_service.provided.CURRENCY_SYMBOL
    )
    membership_discount_calculator = providers.Singleton(
        MembershipDiscountCalculator,
        discount_percent_by_tier=config_service.provided.MEMBERSHIP_DISCOUNT_PERCENT,
    )
    coupon_validator = providers.Singleton(
        CouponValidator, seat_category_match=config_service.provided.COUPON_SEAT_CATEGORY_MATCH
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def cleanup() -> None:
    container.reset_singletons()
