from enum import StrEnum


class SeatCategoryMatchPolicy(StrEnum):
    """How a seat-category scoped coupon qualifies an order"""

    ANY = 'any'  # at least one selected seat is of the category
    ALL = 'all'  # every selected seat is of the category
