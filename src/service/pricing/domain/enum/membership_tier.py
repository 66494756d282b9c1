from enum import StrEnum


class MembershipTier(StrEnum):
    NONE = 'NONE'
    SILVER = 'SILVER'
    GOLD = 'GOLD'
    PLATINUM = 'PLATINUM'
