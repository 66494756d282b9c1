from enum import StrEnum


class RedemptionStatus(StrEnum):
    PENDING = 'pending'
    COMMITTED = 'committed'
    ABORTED = 'aborted'
