"""
Caller identity for pricing

Quotes are open to anonymous callers. When the booking app's session token is present
(bearer header or the `fastapiusersauth` cookie) the user id is read from it and the
membership tier is looked up; anonymous callers are priced at tier NONE.
A token that is present but invalid is rejected rather than silently ignored.
"""

from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends, Header
import attrs

from src.platform.config.di import Container
from src.service.pricing.app.interface.i_user_membership_query_repo import (
    IUserMembershipQueryRepo,
)
from src.service.pricing.domain.enum.membership_tier import MembershipTier
from src.service.pricing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@attrs.frozen
class PricingCaller:
    user_id: Optional[int] = None
    membership_tier: MembershipTier = MembershipTier.NONE


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(' ')
    if scheme.lower() != 'bearer' or not credentials.strip():
        return None
    return credentials.strip()


@inject
async def get_pricing_caller(
    authorization: Optional[str] = Header(None),
    cookie_token: Optional[str] = Cookie(None, alias='fastapiusersauth'),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    user_membership_query_repo: IUserMembershipQueryRepo = Depends(
        Provide[Container.user_membership_query_repo]
    ),
) -> PricingCaller:
    user_id = jwt_auth.get_user_id_from_jwt(bearer_token(authorization) or cookie_token)
    if user_id is None:
        return PricingCaller()

    tier = await user_membership_query_repo.get_membership_tier(user_id=user_id)
    return PricingCaller(user_id=user_id, membership_tier=tier)
