from enum import StrEnum


class RuleType(StrEnum):
    DAY_TYPE = 'DAY_TYPE'
    POPULARITY = 'POPULARITY'
    SEAT_CATEGORY = 'SEAT_CATEGORY'
    DEMAND_SURGE = 'DEMAND_SURGE'
    FLAT_DISCOUNT = 'FLAT_DISCOUNT'

    @classmethod
    def metric_label(cls, raw: str) -> str:
        """Known type name, 'unknown' for anything else"""
        return raw if raw in cls._value2member_map_ else 'unknown'
