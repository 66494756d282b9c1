"""
Pricing Quote Use Case

Composes a read-only price quote for a set of seats of one showtime:
tier price → pricing rules → membership discount → coupon, per seat.
"""

import time
from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Self, Sequence

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import attrs

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.pricing_metrics import metrics
from src.service.pricing.app.dto.catalog_dto import SeatSnapshot, ShowtimeSnapshot
from src.service.pricing.app.interface import (
    ICatalogQueryRepo,
    ICouponQueryRepo,
    ICouponRedemptionLedger,
    IPricingClock,
    IPricingRuleQueryRepo,
)
from src.service.pricing.domain.coupon_validator import (
    CouponAccepted,
    CouponOrderContext,
    CouponValidationResult,
    CouponValidator,
)
from src.service.pricing.domain.entity.coupon_entity import canonical_coupon_code
from src.service.pricing.domain.entity.pricing_quote_entity import (
    CouponSummary,
    PricingQuote,
    SeatPriceBreakdown,
)
from src.service.pricing.domain.enum.membership_tier import MembershipTier
from src.service.pricing.domain.enum.rule_type import RuleType
from src.service.pricing.domain.membership_discount_calculator import (
    MembershipDiscount,
    MembershipDiscountCalculator,
)
from src.service.pricing.domain.pricing_errors import InvalidSeatSelectionError
from src.service.pricing.domain.rule_evaluator import PreparedRules, RuleEvaluation, RuleEvaluator
from src.service.pricing.domain.value_object.money import ZERO, clamp_non_negative, to_money
from src.service.pricing.domain.value_object.seat_pricing_context import SeatPricingContext


@attrs.frozen
class PricedSeat:
    base_price: Decimal
    evaluation: RuleEvaluation
    membership: MembershipDiscount


class GetPricingQuoteUseCase:
    """
    Quote Composer

    Flow:
    1. Validate the seat selection (non-empty, distinct)
    2. Resolve showtime and screen seats once, reject seats of another screen
    3. Per seat: tier price → rule evaluator → membership discount
    4. Coupon validator once against the whole order, shares merged back per seat

    No writes: the same inputs against the same rule/coupon state give the same quote.
    """

    def __init__(
        self,
        *,
        catalog_query_repo: ICatalogQueryRepo,
        pricing_rule_query_repo: IPricingRuleQueryRepo,
        coupon_query_repo: ICouponQueryRepo,
        coupon_redemption_ledger: ICouponRedemptionLedger,
        pricing_clock: IPricingClock,
        rule_evaluator: RuleEvaluator,
        membership_discount_calculator: MembershipDiscountCalculator,
        coupon_validator: CouponValidator,
    ) -> None:
        self.catalog_query_repo = catalog_query_repo
        self.pricing_rule_query_repo = pricing_rule_query_repo
        self.coupon_query_repo = coupon_query_repo
        self.coupon_redemption_ledger = coupon_redemption_ledger
        self.pricing_clock = pricing_clock
        self.rule_evaluator = rule_evaluator
        self.membership_discount_calculator = membership_discount_calculator
        self.coupon_validator = coupon_validator
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_query_repo]),
        pricing_rule_query_repo: IPricingRuleQueryRepo = Depends(
            Provide[Container.pricing_rule_query_repo]
        ),
        coupon_query_repo: ICouponQueryRepo = Depends(Provide[Container.coupon_query_repo]),
        coupon_redemption_ledger: ICouponRedemptionLedger = Depends(
            Provide[Container.coupon_redemption_ledger]
        ),
        pricing_clock: IPricingClock = Depends(Provide[Container.pricing_clock]),
        rule_evaluator: RuleEvaluator = Depends(Provide[Container.rule_evaluator]),
        membership_discount_calculator: MembershipDiscountCalculator = Depends(
            Provide[Container.membership_discount_calculator]
        ),
        coupon_validator: CouponValidator = Depends(Provide[Container.coupon_validator]),
    ) -> Self:
        return cls(
            catalog_query_repo=catalog_query_repo,
            pricing_rule_query_repo=pricing_rule_query_repo,
            coupon_query_repo=coupon_query_repo,
            coupon_redemption_ledger=coupon_redemption_ledger,
            pricing_clock=pricing_clock,
            rule_evaluator=rule_evaluator,
            membership_discount_calculator=membership_discount_calculator,
            coupon_validator=coupon_validator,
        )

    @Logger.io
    async def quote(
        self,
        *,
        showtime_id: int,
        seat_ids: Sequence[int],
        coupon_code: Optional[str] = None,
        payment_method: Optional[str] = None,
        user_id: Optional[int] = None,
        membership_tier: MembershipTier = MembershipTier.NONE,
    ) -> PricingQuote:
        """
        Price the selected seats of a showtime

        Args:
            showtime_id: Showtime being booked
            seat_ids: Selected seats, in display order
            coupon_code: Optional coupon code (case-insensitive)
            payment_method: Optional payment method, used by payment-scoped coupons
            user_id: Caller, None for anonymous quotes
            membership_tier: Caller's loyalty tier

        Returns:
            PricingQuote; a rejected coupon is reported in `coupon_error`, not raised

        Raises:
            InvalidSeatSelectionError: Empty, duplicated or foreign seat ids
            NotFoundError: Unknown showtime
        """
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.get_pricing_quote',
            attributes={
                'showtime.id': showtime_id,
                'seat.count': len(seat_ids),
                'coupon.requested': bool(coupon_code),
            },
        ) as span:
            self._validate_selection(seat_ids=seat_ids)

            showtime = await self.catalog_query_repo.resolve_showtime(showtime_id=showtime_id)
            if showtime is None:
                raise NotFoundError(f'Showtime {showtime_id} not found')
            seats = await self._resolve_selected_seats(showtime=showtime, seat_ids=seat_ids)

            today = self.pricing_clock.today()
            prepared = self.rule_evaluator.prepare(
                candidate_rules=await self.pricing_rule_query_repo.list_active_rules(),
                today=today,
            )
            for skipped in prepared.skipped:
                metrics.record_skipped_rule(rule_type=RuleType.metric_label(skipped.rule_type))

            priced = [
                self._price_seat(
                    showtime=showtime,
                    seat=seat,
                    prepared=prepared,
                    membership_tier=membership_tier,
                    today=today,
                )
                for seat in seats
            ]
            subtotal = to_money(sum((p.membership.after_membership for p in priced), ZERO))

            validation = await self._validate_coupon(
                coupon_code=coupon_code,
                showtime=showtime,
                seats=seats,
                priced=priced,
                today=today,
                user_id=user_id,
                payment_method=payment_method,
            )

            quote = self._assemble(
                showtime=showtime,
                seats=seats,
                priced=priced,
                subtotal=subtotal,
                validation=validation,
                membership_tier=membership_tier,
                calculation_ms=(time.perf_counter() - started) * 1000,
            )

            coupon_outcome = self._coupon_outcome(validation)
            span.set_attribute('coupon.outcome', coupon_outcome)
            metrics.record_quote(
                coupon_outcome=coupon_outcome, duration=time.perf_counter() - started
            )
            if quote.coupon_error is not None:
                metrics.record_coupon_rejection(reason=quote.coupon_error)

            Logger.base.info(
                f'💰 [QUOTE] showtime={showtime_id} seats={len(seats)} '
                f'subtotal={quote.subtotal} total={quote.total} coupon={coupon_outcome}'
            )
            return quote

    @staticmethod
    def _validate_selection(*, seat_ids: Sequence[int]) -> None:
        if not seat_ids:
            raise InvalidSeatSelectionError('At least one seat must be selected')
        if len(set(seat_ids)) != len(seat_ids):
            duplicates = sorted(seat_id for seat_id, n in Counter(seat_ids).items() if n > 1)
            raise InvalidSeatSelectionError(f'Duplicate seat ids: {duplicates}')

    async def _resolve_selected_seats(
        self, *, showtime: ShowtimeSnapshot, seat_ids: Sequence[int]
    ) -> List[SeatSnapshot]:
        screen_seats: Dict[int, SeatSnapshot] = {
            seat.id: seat
            for seat in await self.catalog_query_repo.resolve_seats(showtime_id=showtime.id)
            if seat.screen_id == showtime.screen_id
        }
        unknown = [seat_id for seat_id in seat_ids if seat_id not in screen_seats]
        if unknown:
            raise InvalidSeatSelectionError.unknown_seats(
                showtime_id=showtime.id, seat_ids=unknown
            )
        return [screen_seats[seat_id] for seat_id in seat_ids]

    def _price_seat(
        self,
        *,
        showtime: ShowtimeSnapshot,
        seat: SeatSnapshot,
        prepared: PreparedRules,
        membership_tier: MembershipTier,
        today: date,
    ) -> PricedSeat:
        context = SeatPricingContext(
            seat_id=seat.id,
            seat_type=seat.type,
            base_price=to_money(showtime.base_price_for(seat)),
            showtime_start=self.pricing_clock.localize(showtime.start_time),
            popularity_score=showtime.popularity_score,
            occupancy_percent=showtime.occupancy_percent,
            occupancy_threshold_percent=showtime.occupancy_threshold_percent,
        )
        evaluation = self.rule_evaluator.evaluate(
            seat_context=context, candidate_rules=prepared, today=today
        )
        membership = self.membership_discount_calculator.apply(
            price=evaluation.after_rules, tier=membership_tier
        )
        return PricedSeat(
            base_price=context.base_price, evaluation=evaluation, membership=membership
        )

    async def _validate_coupon(
        self,
        *,
        coupon_code: Optional[str],
        showtime: ShowtimeSnapshot,
        seats: List[SeatSnapshot],
        priced: List[PricedSeat],
        today: date,
        user_id: Optional[int],
        payment_method: Optional[str],
    ) -> Optional[CouponValidationResult]:
        if coupon_code is None or not coupon_code.strip():
            return None

        coupon = await self.coupon_query_repo.get_by_code(code=canonical_coupon_code(coupon_code))
        prior_redemptions = 0
        if coupon is not None and coupon.per_user_limit is not None and user_id is not None:
            prior_redemptions = await self.coupon_redemption_ledger.count_redemptions(
                coupon_id=coupon.id, user_id=user_id
            )

        order = CouponOrderContext(
            seat_types=tuple(seat.type for seat in seats),
            seat_amounts=tuple(p.membership.after_membership for p in priced),
            showtime_id=showtime.id,
            movie_id=showtime.movie_id,
            today=today,
            user_id=user_id,
            prior_redemptions=prior_redemptions,
            payment_method=payment_method,
            theater_owner_id=showtime.theater_owner_id,
        )
        return self.coupon_validator.validate(coupon=coupon, order=order)

    @staticmethod
    def _assemble(
        *,
        showtime: ShowtimeSnapshot,
        seats: List[SeatSnapshot],
        priced: List[PricedSeat],
        subtotal: Decimal,
        validation: Optional[CouponValidationResult],
        membership_tier: MembershipTier,
        calculation_ms: float,
    ) -> PricingQuote:
        if isinstance(validation, CouponAccepted):
            shares = validation.distribution
            coupon_discount = validation.discount_amount
            coupon_summary: Optional[CouponSummary] = CouponSummary(
                coupon_id=validation.coupon.id,
                code=validation.coupon.code,
                discount_type=validation.coupon.discount_type,
                discount_value=validation.coupon.discount_value,
                discount_amount=validation.discount_amount,
            )
            coupon_error = None
        else:
            shares = tuple(ZERO for _ in seats)
            coupon_discount = ZERO
            coupon_summary = None
            coupon_error = validation.reason if validation is not None else None

        breakdowns = []
        for seat, p, share in zip(seats, priced, shares):
            after_coupon = clamp_non_negative(to_money(p.membership.after_membership - share))
            breakdowns.append(
                SeatPriceBreakdown(
                    seat_id=seat.id,
                    seat_type=seat.type,
                    base_price=p.base_price,
                    applied_rules=p.evaluation.applied_rules,
                    after_rules=p.evaluation.after_rules,
                    membership_discount_percent=p.membership.percent,
                    membership_discount_amount=p.membership.amount,
                    after_membership=p.membership.after_membership,
                    coupon_discount_amount=share,
                    after_coupon=after_coupon,
                    final_price=after_coupon,
                )
            )

        return PricingQuote(
            showtime_id=showtime.id,
            movie_title=showtime.movie_title,
            seats=tuple(breakdowns),
            subtotal=subtotal,
            coupon=coupon_summary,
            coupon_error=coupon_error,
            coupon_discount=coupon_discount,
            total=clamp_non_negative(to_money(subtotal - coupon_discount)),
            membership_tier=membership_tier,
            calculation_ms=calculation_ms,
        )

    @staticmethod
    def _coupon_outcome(validation: Optional[CouponValidationResult]) -> str:
        if validation is None:
            return 'none'
        return 'accepted' if isinstance(validation, CouponAccepted) else 'rejected'
