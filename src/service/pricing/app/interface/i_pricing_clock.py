from abc import ABC, abstractmethod
from datetime import date, datetime


class IPricingClock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current time, timezone-aware, in the zone business days are counted in"""
        pass

    def today(self) -> date:
        return self.now().date()

    def localize(self, moment: datetime) -> datetime:
        """
        Express a stored timestamp in the business zone

        Aware values (asyncpg returns timestamptz in UTC) are converted;
        naive values are taken as already being business-zone wall time.
        """
        zone = self.now().tzinfo
        if moment.tzinfo is None:
            return moment.replace(tzinfo=zone)
        return moment.astimezone(zone)
