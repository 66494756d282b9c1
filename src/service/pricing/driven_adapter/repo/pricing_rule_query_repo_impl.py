from typing import List

import asyncpg

from src.platform.database.asyncpg_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.pricing.app.interface.i_pricing_rule_query_repo import IPricingRuleQueryRepo
from src.service.pricing.domain.entity.pricing_rule_entity import PricingRule


class PricingRuleQueryRepoImpl(IPricingRuleQueryRepo):
    @staticmethod
    def _row_to_entity(row: asyncpg.Record) -> PricingRule:
        """Unparseable conditions become MalformedCondition instead of failing the read"""
        return PricingRule.from_raw(
            id=row['id'],
            name=row['name'],
            rule_type=row['rule_type'],
            condition=row['condition'],
            multiplier=row['multiplier'],
            flat_discount=row['flat_discount'],
            priority=row['priority'],
            is_active=row['is_active'],
            valid_from=row['valid_from'],
            valid_until=row['valid_until'],
        )

    @Logger.io
    async def list_active_rules(self) -> List[PricingRule]:
        async with (await get_asyncpg_pool()).acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT id, name, rule_type, condition, multiplier, flat_discount,
                       priority, is_active, valid_from, valid_until
                FROM pricing_rule
                WHERE is_active
                """
            )
            return [self._row_to_entity(row) for row in rows]
