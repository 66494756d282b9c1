"""
Pricing rule conditions.

Each rule type owns exactly one condition shape. Raw payloads coming from the store
are parsed once, when the rule is loaded; anything that cannot be parsed becomes a
`MalformedCondition`, which never matches.

Stored payload shapes:
    DAY_TYPE:      {"days": [0, 6]}       0=Sunday .. 6=Saturday
    POPULARITY:    {"minScore": 75}       0..100
    SEAT_CATEGORY: {"category": "Premium"}
    DEMAND_SURGE:  {}                     threshold lives on the showtime
    FLAT_DISCOUNT: {}                     always matches
"""

from typing import Any, FrozenSet, Mapping, Union

import attrs

from src.service.pricing.domain.enum.rule_type import RuleType


@attrs.frozen
class DayTypeCondition:
    days: FrozenSet[int]


@attrs.frozen
class PopularityCondition:
    min_score: int


@attrs.frozen
class SeatCategoryCondition:
    category: str


@attrs.frozen
class DemandSurgeCondition:
    pass


@attrs.frozen
class FlatDiscountCondition:
    pass


@attrs.frozen
class MalformedCondition:
    rule_type: str
    reason: str


RuleCondition = Union[
    DayTypeCondition,
    PopularityCondition,
    SeatCategoryCondition,
    DemandSurgeCondition,
    FlatDiscountCondition,
    MalformedCondition,
]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_rule_condition(*, rule_type: str, payload: Mapping[str, Any] | None) -> RuleCondition:
    try:
        tag = RuleType(rule_type)
    except ValueError:
        return MalformedCondition(rule_type=str(rule_type), reason='unknown rule type')

    payload = payload if payload is not None else {}
    if not isinstance(payload, Mapping):
        return MalformedCondition(rule_type=tag, reason='condition is not an object')

    if tag is RuleType.DAY_TYPE:
        days = payload.get('days')
        if not isinstance(days, (list, tuple)) or not days:
            return MalformedCondition(rule_type=tag, reason='days must be a non-empty list')
        if not all(_is_int(day) and 0 <= day <= 6 for day in days):
            return MalformedCondition(rule_type=tag, reason='days must be integers 0..6')
        return DayTypeCondition(days=frozenset(days))

    if tag is RuleType.POPULARITY:
        min_score = payload.get('minScore')
        if not _is_int(min_score) or not 0 <= min_score <= 100:
            return MalformedCondition(rule_type=tag, reason='minScore must be an integer 0..100')
        return PopularityCondition(min_score=min_score)

    if tag is RuleType.SEAT_CATEGORY:
        category = payload.get('category')
        if not isinstance(category, str) or not category.strip():
            return MalformedCondition(rule_type=tag, reason='category must be a non-empty string')
        return SeatCategoryCondition(category=category.strip())

    if tag is RuleType.DEMAND_SURGE:
        return DemandSurgeCondition()

    return FlatDiscountCondition()
