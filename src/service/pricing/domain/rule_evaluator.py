"""
Rule Evaluator

Pure pricing-rule logic: filter the candidate rules that are in effect and match a
seat, order them by (priority, id) and apply them one after another to the seat's
base price. No I/O.

A rule that cannot be evaluated (unknown type, malformed condition, unusable effect)
is skipped and logged; it never changes a price and never raises.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.pricing.domain.entity.pricing_quote_entity import AppliedRule
from src.service.pricing.domain.entity.pricing_rule_entity import PricingRule
from src.service.pricing.domain.value_object.money import (
    clamp_non_negative,
    format_money,
    to_money,
)
from src.service.pricing.domain.value_object.rule_condition import (
    DayTypeCondition,
    DemandSurgeCondition,
    FlatDiscountCondition,
    MalformedCondition,
    PopularityCondition,
    SeatCategoryCondition,
)
from src.service.pricing.domain.value_object.seat_pricing_context import SeatPricingContext


@attrs.frozen
class SkippedRule:
    rule_id: int
    rule_type: str
    reason: str


@attrs.frozen
class RuleEvaluation:
    applied_rules: Tuple[AppliedRule, ...]
    after_rules: Decimal


@attrs.frozen
class PreparedRules:
    """Rules in effect for a day, well-formed and sorted, ready for per-seat evaluation"""

    rules: Tuple[PricingRule, ...]
    skipped: Tuple[SkippedRule, ...]


class RuleEvaluator:
    def __init__(self, *, currency_symbol: str = '₹') -> None:
        self.currency_symbol = currency_symbol

    def prepare(self, *, candidate_rules: Iterable[PricingRule], today: date) -> PreparedRules:
        kept: List[PricingRule] = []
        skipped: List[SkippedRule] = []
        for rule in candidate_rules:
            if not rule.is_in_effect_on(today):
                continue
            problem = self._rule_problem(rule)
            if problem is not None:
                skipped.append(
                    SkippedRule(rule_id=rule.id, rule_type=rule.rule_type, reason=problem)
                )
                Logger.base.warning(
                    f'⚠️ [RULE-EVALUATOR] Skipping pricing rule {rule.id} '
                    f'({rule.rule_type} "{rule.name}"): {problem}'
                )
                continue
            if not rule.has_effect:
                # No effect configured, nothing to apply
                continue
            kept.append(rule)

        kept.sort(key=lambda r: r.sort_key)
        return PreparedRules(rules=tuple(kept), skipped=tuple(skipped))

    def evaluate(
        self,
        *,
        seat_context: SeatPricingContext,
        candidate_rules: Sequence[PricingRule] | PreparedRules,
        today: date,
    ) -> RuleEvaluation:
        prepared = (
            candidate_rules
            if isinstance(candidate_rules, PreparedRules)
            else self.prepare(candidate_rules=candidate_rules, today=today)
        )

        price = to_money(seat_context.base_price)
        applied: List[AppliedRule] = []
        for rule in prepared.rules:
            if not self.matches(rule=rule, seat_context=seat_context):
                continue
            price_before = price
            if rule.multiplier is not None:
                price = clamp_non_negative(to_money(price_before * rule.multiplier))
                effect = f'×{rule.multiplier.quantize(Decimal("0.01"))}'
            else:
                assert rule.flat_discount is not None
                price = clamp_non_negative(to_money(price_before - rule.flat_discount))
                # Clamped discounts show what was actually taken off
                effect = f'−{format_money(price_before - price, symbol=self.currency_symbol)}'
            applied.append(
                AppliedRule(
                    rule_id=rule.id,
                    name=rule.name,
                    rule_type=rule.rule_type,
                    effect=effect,
                    price_before=price_before,
                    price_after=price,
                )
            )

        return RuleEvaluation(applied_rules=tuple(applied), after_rules=price)

    @staticmethod
    def matches(*, rule: PricingRule, seat_context: SeatPricingContext) -> bool:
        condition = rule.condition
        if isinstance(condition, DayTypeCondition):
            return seat_context.showtime_weekday in condition.days
        if isinstance(condition, PopularityCondition):
            return seat_context.popularity_score >= condition.min_score
        if isinstance(condition, SeatCategoryCondition):
            return seat_context.seat_type.strip().lower() == condition.category.lower()
        if isinstance(condition, DemandSurgeCondition):
            occupancy = seat_context.occupancy_percent
            return occupancy is not None and occupancy >= seat_context.occupancy_threshold_percent
        if isinstance(condition, FlatDiscountCondition):
            return True
        return False

    @staticmethod
    def _rule_problem(rule: PricingRule) -> Optional[str]:
        if rule.is_malformed:
            assert isinstance(rule.condition, MalformedCondition)
            return rule.condition.reason
        return rule.effect_problem()
