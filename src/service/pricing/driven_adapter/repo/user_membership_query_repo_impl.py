from src.platform.database.asyncpg_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.pricing.app.interface.i_user_membership_query_repo import (
    IUserMembershipQueryRepo,
)
from src.service.pricing.domain.enum.membership_tier import MembershipTier


class UserMembershipQueryRepoImpl(IUserMembershipQueryRepo):
    @Logger.io
    async def get_membership_tier(self, *, user_id: int) -> MembershipTier:
        async with (await get_asyncpg_pool()).acquire() as conn:
            tier = await conn.fetchval(
                'SELECT membership_tier FROM "user" WHERE id = $1',
                user_id,
            )

            if tier is None:
                return MembershipTier.NONE
            try:
                return MembershipTier(str(tier).upper())
            except ValueError:
                Logger.base.warning(
                    f'⚠️ [MEMBERSHIP] Unknown tier {tier!r} for user {user_id}, pricing as NONE'
                )
                return MembershipTier.NONE
