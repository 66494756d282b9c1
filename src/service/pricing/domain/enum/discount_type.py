from enum import StrEnum


class DiscountType(StrEnum):
    PERCENT = 'PERCENT'
    FLAT = 'FLAT'
