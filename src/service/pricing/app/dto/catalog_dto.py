from datetime import datetime
from decimal import Decimal
from typing import Mapping, Optional

import attrs


@attrs.frozen
class ShowtimeSnapshot:
    """Everything quoting needs to know about a showtime, resolved once per quote"""

    id: int
    movie_id: int
    movie_title: Optional[str]
    popularity_score: int
    screen_id: int
    start_time: datetime
    # Seat type → admin-set base price for this showtime
    tier_prices: Mapping[str, Decimal]
    occupancy_percent: Optional[Decimal]
    occupancy_threshold_percent: Decimal
    theater_owner_id: Optional[int] = None

    def base_price_for(self, seat: 'SeatSnapshot') -> Decimal:
        """Tier price for the seat type, the seat's own price when the tier table lacks it"""
        for seat_type, price in self.tier_prices.items():
            if seat_type.lower() == seat.type.lower():
                return price
        return seat.price


@attrs.frozen
class SeatSnapshot:
    id: int
    screen_id: int
    row: str
    number: int
    type: str
    price: Decimal
    status: str = 'available'
