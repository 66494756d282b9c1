from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs


@attrs.frozen
class SeatPricingContext:
    seat_id: int
    seat_type: str
    base_price: Decimal
    # Business-zone wall time, the weekday is read from it
    showtime_start: datetime
    popularity_score: int
    # Occupancy is computed by the catalog, the engine only compares it
    occupancy_percent: Optional[Decimal]
    occupancy_threshold_percent: Decimal

    @property
    def showtime_weekday(self) -> int:
        """0=Sunday .. 6=Saturday"""
        return self.showtime_start.isoweekday() % 7
