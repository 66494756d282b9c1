from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.pricing.app.query.get_pricing_quote_use_case import GetPricingQuoteUseCase
from src.service.pricing.domain.pricing_errors import InvalidSeatSelectionError
from src.service.pricing.driving_adapter.http_controller.auth.optional_auth import (
    PricingCaller,
    get_pricing_caller,
)
from src.service.pricing.driving_adapter.http_controller.schema.pricing_schema import (
    PricingQuoteResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def parse_seat_ids(raw: str) -> List[int]:
    """'1, 2,3' → [1, 2, 3]; blanks are ignored, anything non-numeric is rejected"""
    seat_ids = []
    for part in raw.split(','):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit():
            raise InvalidSeatSelectionError(f'Invalid seat id: {part!r}')
        seat_ids.append(int(part))
    return seat_ids


@router.get('/quote', response_model=PricingQuoteResponse, response_model_by_alias=True)
@Logger.io
async def get_pricing_quote(
    showtime_id: int = Query(..., alias='showtimeId', gt=0),
    seat_ids: str = Query(..., alias='seatIds', description='Comma-separated seat ids'),
    coupon_code: Optional[str] = Query(None, alias='couponCode'),
    payment_method: Optional[str] = Query(None, alias='paymentMethod'),
    caller: PricingCaller = Depends(get_pricing_caller),
    use_case: GetPricingQuoteUseCase = Depends(GetPricingQuoteUseCase.depends),
) -> PricingQuoteResponse:
    with tracer.start_as_current_span('controller.get_pricing_quote') as span:
        span.set_attribute('showtime_id', showtime_id)
        span.set_attribute('authenticated', caller.user_id is not None)

        quote = await use_case.quote(
            showtime_id=showtime_id,
            seat_ids=parse_seat_ids(seat_ids),
            coupon_code=coupon_code,
            payment_method=payment_method,
            user_id=caller.user_id,
            membership_tier=caller.membership_tier,
        )
        return PricingQuoteResponse.from_entity(quote)
