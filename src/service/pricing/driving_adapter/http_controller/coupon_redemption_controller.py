from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.pricing.app.command.commit_coupon_redemption_use_case import (
    CommitCouponRedemptionUseCase,
)
from src.service.pricing.driving_adapter.http_controller.auth.internal_token_auth import (
    require_internal_token,
)
from src.service.pricing.driving_adapter.http_controller.schema.pricing_schema import (
    CouponRedemptionRequest,
    CouponRedemptionResponse,
)


router = APIRouter(dependencies=[Depends(require_internal_token)])


@router.post(
    '/coupon-redemptions', response_model=CouponRedemptionResponse, response_model_by_alias=True
)
@Logger.io
async def commit_coupon_redemption(
    request: CouponRedemptionRequest,
    use_case: CommitCouponRedemptionUseCase = Depends(CommitCouponRedemptionUseCase.depends),
) -> CouponRedemptionResponse:
    """
    Commit one coupon use for a completed booking.

    A rejected commit is a normal 200 response with `committed=false`; when
    `requoteRequired` is set the booking must be priced again without the coupon.
    """
    redemption = await use_case.commit(
        coupon_id=request.coupon_id,
        user_id=request.user_id,
        booking_id=request.booking_id,
    )
    return CouponRedemptionResponse(
        committed=redemption.committed,
        reason=redemption.reason,
        requote_required=redemption.requote_required,
    )
