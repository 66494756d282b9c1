"""Builders shared by the pricing tests"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from src.service.pricing.app.dto.catalog_dto import SeatSnapshot, ShowtimeSnapshot
from src.service.pricing.app.interface.i_pricing_clock import IPricingClock
from src.service.pricing.domain.entity.coupon_entity import Coupon
from src.service.pricing.domain.entity.pricing_rule_entity import PricingRule
from src.service.pricing.domain.value_object.seat_pricing_context import SeatPricingContext


IST = ZoneInfo('Asia/Kolkata')

# 2026-10-14 is a Wednesday (weekday 3), 2026-10-17 a Saturday (weekday 6)
TODAY = date(2026, 10, 14)
WEDNESDAY_EVENING = datetime(2026, 10, 14, 18, 30, tzinfo=IST)
SATURDAY_EVENING = datetime(2026, 10, 17, 18, 30, tzinfo=IST)
SUNDAY = 0
WEDNESDAY = 3
SATURDAY = 6

SCREEN_ID = 100
OTHER_SCREEN_ID = 200


class FixedPricingClock(IPricingClock):
    def __init__(self, now: datetime = datetime(2026, 10, 14, 10, 0, tzinfo=IST)) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now


def make_rule(
    id: int = 1,
    *,
    rule_type: str = 'FLAT_DISCOUNT',
    condition: Optional[Dict[str, Any]] = None,
    multiplier: Optional[Decimal] = None,
    flat_discount: Optional[Decimal] = None,
    priority: int = 10,
    name: Optional[str] = None,
    is_active: bool = True,
    valid_from: Optional[date] = None,
    valid_until: Optional[date] = None,
) -> PricingRule:
    return PricingRule.from_raw(
        id=id,
        name=name or f'rule-{id}',
        rule_type=rule_type,
        condition=condition if condition is not None else {},
        multiplier=multiplier,
        flat_discount=flat_discount,
        priority=priority,
        is_active=is_active,
        valid_from=valid_from,
        valid_until=valid_until,
    )


def make_coupon(
    id: int = 1,
    *,
    code: str = 'SAVE10',
    discount_type: str = 'PERCENT',
    discount_value: Decimal = Decimal('10'),
    **overrides: Any,
) -> Coupon:
    return Coupon(
        id=id,
        code=code,
        discount_type=discount_type,
        discount_value=discount_value,
        **overrides,
    )


def make_showtime(
    id: int = 1,
    *,
    movie_id: int = 10,
    movie_title: Optional[str] = 'Interstellar',
    screen_id: int = SCREEN_ID,
    start_time: datetime = WEDNESDAY_EVENING,
    tier_prices: Optional[Dict[str, Decimal]] = None,
    popularity_score: int = 50,
    occupancy_percent: Optional[Decimal] = Decimal('0'),
    occupancy_threshold_percent: Decimal = Decimal('70'),
    theater_owner_id: Optional[int] = None,
) -> ShowtimeSnapshot:
    return ShowtimeSnapshot(
        id=id,
        movie_id=movie_id,
        movie_title=movie_title,
        popularity_score=popularity_score,
        screen_id=screen_id,
        start_time=start_time,
        tier_prices=tier_prices if tier_prices is not None else {},
        occupancy_percent=occupancy_percent,
        occupancy_threshold_percent=occupancy_threshold_percent,
        theater_owner_id=theater_owner_id,
    )


def make_seats(
    *,
    screen_id: int = SCREEN_ID,
    start_id: int = 1,
    count: int = 3,
    seat_type: str = 'Standard',
    price: Decimal = Decimal('150'),
    row: str = 'A',
) -> List[SeatSnapshot]:
    return [
        SeatSnapshot(
            id=start_id + offset,
            screen_id=screen_id,
            row=row,
            number=offset + 1,
            type=seat_type,
            price=price,
        )
        for offset in range(count)
    ]


def make_seat_context(
    *,
    seat_id: int = 1,
    seat_type: str = 'Standard',
    base_price: Decimal = Decimal('150'),
    showtime_start: datetime = WEDNESDAY_EVENING,
    popularity_score: int = 50,
    occupancy_percent: Optional[Decimal] = Decimal('0'),
    occupancy_threshold_percent: Decimal = Decimal('70'),
) -> SeatPricingContext:
    return SeatPricingContext(
        seat_id=seat_id,
        seat_type=seat_type,
        base_price=base_price,
        showtime_start=showtime_start,
        popularity_score=popularity_score,
        occupancy_percent=occupancy_percent,
        occupancy_threshold_percent=occupancy_threshold_percent,
    )
