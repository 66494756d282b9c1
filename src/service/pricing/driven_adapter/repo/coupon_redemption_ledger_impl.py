from src.platform.database.asyncpg_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.pricing.app.interface.i_coupon_redemption_ledger import ICouponRedemptionLedger


class CouponRedemptionLedgerImpl(ICouponRedemptionLedger):
    @Logger.io
    async def count_redemptions(self, *, coupon_id: int, user_id: int) -> int:
        async with (await get_asyncpg_pool()).acquire() as conn:
            count = await conn.fetchval(
                'SELECT COUNT(*) FROM coupon_usage WHERE coupon_id = $1 AND user_id = $2',
                coupon_id,
                user_id,
            )
            return int(count or 0)
