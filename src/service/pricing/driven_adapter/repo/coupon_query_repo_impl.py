from typing import Optional

import asyncpg

from src.platform.database.asyncpg_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.pricing.app.interface.i_coupon_query_repo import ICouponQueryRepo
from src.service.pricing.domain.entity.coupon_entity import Coupon, canonical_coupon_code


class CouponQueryRepoImpl(ICouponQueryRepo):
    @staticmethod
    def _row_to_entity(row: asyncpg.Record) -> Coupon:
        return Coupon(
            id=row['id'],
            code=row['code'],
            discount_type=row['discount_type'],
            discount_value=row['discount_value'],
            max_uses=row['max_uses'],
            used_count=row['used_count'],
            per_user_limit=row['per_user_limit'],
            min_order_value=row['min_order_value'],
            valid_from=row['valid_from'],
            expires_at=row['expires_at'],
            movie_id=row['movie_id'],
            showtime_id=row['showtime_id'],
            seat_category=row['seat_category'],
            payment_method=row['payment_method'],
            created_by=row['created_by'],
            issued_by_super_admin=bool(row['issued_by_super_admin']),
            is_active=row['is_active'],
        )

    @Logger.io
    async def get_by_code(self, *, code: str) -> Optional[Coupon]:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT c.id, c.code, c.discount_type, c.discount_value, c.max_uses,
                       c.used_count, c.per_user_limit, c.min_order_value, c.valid_from,
                       c.expires_at, c.movie_id, c.showtime_id, c.seat_category,
                       c.payment_method, c.created_by, c.is_active,
                       (u.role = 'super_admin') AS issued_by_super_admin
                FROM coupon c
                LEFT JOIN "user" u ON u.id = c.created_by
                WHERE c.code = $1
                """,
                canonical_coupon_code(code),
            )

            if not row:
                return None

            return self._row_to_entity(row)
