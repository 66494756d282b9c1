"""In-memory catalog and membership lookups for PRICING_STORE_BACKEND=memory"""

from typing import Dict, Iterable, List, Optional

from src.service.pricing.app.dto.catalog_dto import SeatSnapshot, ShowtimeSnapshot
from src.service.pricing.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.pricing.app.interface.i_user_membership_query_repo import (
    IUserMembershipQueryRepo,
)
from src.service.pricing.domain.enum.membership_tier import MembershipTier


class InMemoryCatalogQueryRepo(ICatalogQueryRepo):
    def __init__(
        self,
        *,
        showtimes: Iterable[ShowtimeSnapshot] = (),
        seats: Iterable[SeatSnapshot] = (),
    ) -> None:
        self._showtimes: Dict[int, ShowtimeSnapshot] = {s.id: s for s in showtimes}
        self._seats: Dict[int, SeatSnapshot] = {s.id: s for s in seats}

    def put_showtime(self, showtime: ShowtimeSnapshot) -> None:
        self._showtimes[showtime.id] = showtime

    def put_seats(self, seats: Iterable[SeatSnapshot]) -> None:
        for seat in seats:
            self._seats[seat.id] = seat

    def clear(self) -> None:
        self._showtimes.clear()
        self._seats.clear()

    async def resolve_showtime(self, *, showtime_id: int) -> Optional[ShowtimeSnapshot]:
        return self._showtimes.get(showtime_id)

    async def resolve_seats(self, *, showtime_id: int) -> List[SeatSnapshot]:
        showtime = self._showtimes.get(showtime_id)
        if showtime is None:
            return []
        return [seat for seat in self._seats.values() if seat.screen_id == showtime.screen_id]


class InMemoryUserMembershipQueryRepo(IUserMembershipQueryRepo):
    def __init__(self, *, tiers: Optional[Dict[int, MembershipTier]] = None) -> None:
        self._tiers: Dict[int, MembershipTier] = dict(tiers or {})

    def put_tier(self, *, user_id: int, tier: MembershipTier) -> None:
        self._tiers[user_id] = MembershipTier(tier)

    def clear(self) -> None:
        self._tiers.clear()

    async def get_membership_tier(self, *, user_id: int) -> MembershipTier:
        return self._tiers.get(user_id, MembershipTier.NONE)
