from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

import attrs

from src.service.pricing.domain.value_object.rule_condition import (
    MalformedCondition,
    RuleCondition,
    parse_rule_condition,
)


@attrs.frozen
class PricingRule:
    """
    Admin-managed pricing rule, read-only to the engine.

    `multiplier` wins when both effects are set. A rule with neither effect is a no-op.
    Lower `priority` applies first, ties broken by `id`.
    """

    id: int
    name: str
    rule_type: str
    condition: RuleCondition
    multiplier: Optional[Decimal] = None
    flat_discount: Optional[Decimal] = None
    priority: int = 10
    is_active: bool = True
    valid_from: Optional[date] = None
    valid_until: Optional[date] = None

    @classmethod
    def from_raw(
        cls,
        *,
        id: int,
        name: str,
        rule_type: str,
        condition: Mapping[str, Any] | None,
        multiplier: Optional[Decimal] = None,
        flat_discount: Optional[Decimal] = None,
        priority: int = 10,
        is_active: bool = True,
        valid_from: Optional[date] = None,
        valid_until: Optional[date] = None,
    ) -> 'PricingRule':
        return cls(
            id=id,
            name=name,
            rule_type=str(rule_type),
            condition=parse_rule_condition(rule_type=rule_type, payload=condition),
            multiplier=multiplier,
            flat_discount=flat_discount,
            priority=priority,
            is_active=is_active,
            valid_from=valid_from,
            valid_until=valid_until,
        )

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.priority, self.id)

    @property
    def is_malformed(self) -> bool:
        return isinstance(self.condition, MalformedCondition)

    @property
    def has_effect(self) -> bool:
        return self.multiplier is not None or self.flat_discount is not None

    def effect_problem(self) -> Optional[str]:
        """Why the configured effect cannot be applied, None when it can"""
        if self.multiplier is not None:
            if not isinstance(self.multiplier, Decimal) or not self.multiplier.is_finite():
                return 'multiplier is not a finite decimal'
            if self.multiplier <= 0:
                return 'multiplier must be positive'
            return None
        if self.flat_discount is not None:
            if not isinstance(self.flat_discount, Decimal) or not self.flat_discount.is_finite():
                return 'flatDiscount is not a finite decimal'
            if self.flat_discount < 0:
                return 'flatDiscount must not be negative'
        return None

    def is_in_effect_on(self, day: date) -> bool:
        if not self.is_active:
            return False
        if self.valid_from is not None and day < self.valid_from:
            return False
        if self.valid_until is not None and day > self.valid_until:
            return False
        return True
