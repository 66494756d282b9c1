"""
Catalog Query Repository Interface

Read-only view of showtimes, movies, screens and seats owned by the booking app.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.pricing.app.dto.catalog_dto import SeatSnapshot, ShowtimeSnapshot


class ICatalogQueryRepo(ABC):
    @abstractmethod
    async def resolve_showtime(self, *, showtime_id: int) -> Optional[ShowtimeSnapshot]:
        """
        Resolve a showtime with its movie, screen, tier price table and occupancy

        Returns:
            ShowtimeSnapshot or None if the showtime does not exist
        """
        pass

    @abstractmethod
    async def resolve_seats(self, *, showtime_id: int) -> List[SeatSnapshot]:
        """
        List every seat of the showtime's screen

        Returns:
            Seats of the screen (empty when the showtime does not exist)
        """
        pass
