"""
Catalog Query Repository Implementation

Read-only access to the booking app's showtime / movie / screen / theater / seat tables.
Occupancy is derived here (confirmed tickets over screen seats), the engine only compares it.
"""

from decimal import Decimal
from typing import List, Optional

import asyncpg

from src.platform.config.core_setting import settings
from src.platform.database.asyncpg_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.pricing.app.dto.catalog_dto import SeatSnapshot, ShowtimeSnapshot
from src.service.pricing.app.interface.i_catalog_query_repo import ICatalogQueryRepo


class CatalogQueryRepoImpl(ICatalogQueryRepo):
    @staticmethod
    def _row_to_showtime(row: asyncpg.Record) -> ShowtimeSnapshot:
        total_seats = row['total_seats'] or 0
        occupancy = (
            Decimal(row['booked_seats']) * Decimal('100') / Decimal(total_seats)
            if total_seats > 0
            else Decimal('0')
        )
        tier_prices = {
            seat_type: Decimal(str(price))
            for seat_type, price in (row['tier_prices'] or {}).items()
        }
        popularity = row['popularity_score']
        threshold = row['occupancy_threshold']
        return ShowtimeSnapshot(
            id=row['id'],
            movie_id=row['movie_id'],
            movie_title=row['movie_title'],
            popularity_score=(
                popularity if popularity is not None else settings.DEFAULT_POPULARITY_SCORE
            ),
            screen_id=row['screen_id'],
            start_time=row['start_time'],
            tier_prices=tier_prices,
            occupancy_percent=occupancy,
            occupancy_threshold_percent=(
                Decimal(threshold)
                if threshold is not None
                else settings.DEFAULT_OCCUPANCY_THRESHOLD_PERCENT
            ),
            theater_owner_id=row['theater_owner_id'],
        )

    @Logger.io
    async def resolve_showtime(self, *, showtime_id: int) -> Optional[ShowtimeSnapshot]:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT s.id, s.movie_id, s.screen_id, s.start_time, s.tier_prices,
                       s.occupancy_threshold,
                       m.title AS movie_title, m.popularity_score,
                       t.owner_id AS theater_owner_id,
                       (SELECT COUNT(*) FROM seat WHERE seat.screen_id = s.screen_id)
                           AS total_seats,
                       (SELECT COUNT(*)
                          FROM ticket tk
                          JOIN booking b ON b.id = tk.booking_id
                         WHERE b.showtime_id = s.id AND b.status = 'confirmed')
                           AS booked_seats
                FROM showtime s
                JOIN movie m ON m.id = s.movie_id
                JOIN screen sc ON sc.id = s.screen_id
                LEFT JOIN theater t ON t.id = sc.theater_id
                WHERE s.id = $1
                """,
                showtime_id,
            )

            if not row:
                return None

            return self._row_to_showtime(row)

    @Logger.io
    async def resolve_seats(self, *, showtime_id: int) -> List[SeatSnapshot]:
        async with (await get_asyncpg_pool()).acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT seat.id, seat.screen_id, seat.row, seat.number, seat.type, seat.price
                FROM seat
                JOIN showtime s ON s.screen_id = seat.screen_id
                WHERE s.id = $1
                ORDER BY seat.row, seat.number
                """,
                showtime_id,
            )

            return [
                SeatSnapshot(
                    id=row['id'],
                    screen_id=row['screen_id'],
                    row=row['row'],
                    number=row['number'],
                    type=row['type'],
                    price=row['price'],
                )
                for row in rows
            ]
