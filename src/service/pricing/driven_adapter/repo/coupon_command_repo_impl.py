"""
Coupon Command Repository Implementation

The only writer of coupon.used_count. One transaction per redemption:

1. Conditional UPDATE ... WHERE used_count < max_uses RETURNING: the cap check and the
   increment are one statement, and the row lock it takes serialises concurrent commits
   of the same coupon until this transaction ends.
2. Per-user count under that lock.
3. Ledger insert; UNIQUE (coupon_id, booking_id) turns a retried booking into a no-op.

Any rejection after step 1 rolls the increment back.
"""

from typing import Optional

import asyncpg

from src.platform.database.asyncpg_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.pricing.app.interface.i_coupon_command_repo import ICouponCommandRepo
from src.service.pricing.domain.enum.coupon_usage_increment_outcome import (
    CouponUsageIncrementOutcome,
)


class _IncrementRejected(Exception):
    def __init__(self, outcome: CouponUsageIncrementOutcome) -> None:
        super().__init__(outcome.value)
        self.outcome = outcome


class CouponCommandRepoImpl(ICouponCommandRepo):
    @Logger.io
    async def increment_usage(
        self, *, coupon_id: int, user_id: int, booking_id: Optional[str] = None
    ) -> CouponUsageIncrementOutcome:
        async with (await get_asyncpg_pool()).acquire() as conn:
            try:
                async with conn.transaction():
                    await self._redeem(
                        conn, coupon_id=coupon_id, user_id=user_id, booking_id=booking_id
                    )
            except _IncrementRejected as e:
                return e.outcome
            except asyncpg.UniqueViolationError:
                # Concurrent commit of the same booking won the ledger insert
                return CouponUsageIncrementOutcome.ALREADY_REDEEMED_FOR_BOOKING

            return CouponUsageIncrementOutcome.INCREMENTED

    async def _redeem(
        self,
        conn: asyncpg.Connection,
        *,
        coupon_id: int,
        user_id: int,
        booking_id: Optional[str],
    ) -> None:
        if booking_id is not None:
            already = await conn.fetchval(
                'SELECT 1 FROM coupon_usage WHERE coupon_id = $1 AND booking_id = $2',
                coupon_id,
                booking_id,
            )
            if already:
                raise _IncrementRejected(CouponUsageIncrementOutcome.ALREADY_REDEEMED_FOR_BOOKING)

        row = await conn.fetchrow(
            """
            UPDATE coupon
               SET used_count = used_count + 1
             WHERE id = $1
               AND is_active
               AND (max_uses IS NULL OR used_count < max_uses)
            RETURNING per_user_limit
            """,
            coupon_id,
        )
        if row is None:
            raise _IncrementRejected(await self._classify_failed_update(conn, coupon_id=coupon_id))

        per_user_limit = row['per_user_limit']
        if per_user_limit is not None:
            prior = await conn.fetchval(
                'SELECT COUNT(*) FROM coupon_usage WHERE coupon_id = $1 AND user_id = $2',
                coupon_id,
                user_id,
            )
            if prior >= per_user_limit:
                raise _IncrementRejected(CouponUsageIncrementOutcome.PER_USER_LIMIT_REACHED)

        await conn.execute(
            """
            INSERT INTO coupon_usage (coupon_id, user_id, booking_id, created_at)
            VALUES ($1, $2, $3, NOW())
            """,
            coupon_id,
            user_id,
            booking_id,
        )

    @staticmethod
    async def _classify_failed_update(
        conn: asyncpg.Connection, *, coupon_id: int
    ) -> CouponUsageIncrementOutcome:
        """Nothing was written; read back only to report why"""
        row = await conn.fetchrow('SELECT is_active FROM coupon WHERE id = $1', coupon_id)
        if row is None:
            return CouponUsageIncrementOutcome.NOT_FOUND
        if not row['is_active']:
            return CouponUsageIncrementOutcome.INACTIVE
        return CouponUsageIncrementOutcome.USAGE_LIMIT_REACHED
