from abc import ABC, abstractmethod
from typing import List

from src.service.pricing.domain.entity.pricing_rule_entity import PricingRule


class IPricingRuleQueryRepo(ABC):
    @abstractmethod
    async def list_active_rules(self) -> List[PricingRule]:
        """
        List rules flagged active, in any order

        Date windows are not filtered here; the evaluator decides what is in effect.
        """
        pass
