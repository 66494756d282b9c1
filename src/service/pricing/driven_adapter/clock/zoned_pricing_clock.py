from datetime import datetime
from zoneinfo import ZoneInfo

from src.service.pricing.app.interface.i_pricing_clock import IPricingClock


class ZonedPricingClock(IPricingClock):
    def __init__(self, *, timezone: str) -> None:
        self._zone = ZoneInfo(timezone)

    def now(self) -> datetime:
        return datetime.now(self._zone)
