from decimal import Decimal

import pytest

from src.service.pricing.domain.coupon_discount_distributor import distribute_proportionally


@pytest.mark.unit
class TestDistributeProportionally:
    def test_shares_sum_exactly_to_total(self) -> None:
        """
        Given: ₹100 split across three equal seats
        When: the discount is distributed
        Then: the leftover paisa goes to the first seat and nothing leaks
        """
        shares = distribute_proportionally(
            total=Decimal('100'), weights=[Decimal('150')] * 3
        )

        assert shares == (Decimal('33.34'), Decimal('33.33'), Decimal('33.33'))
        assert sum(shares) == Decimal('100.00')

    def test_shares_follow_weights(self) -> None:
        shares = distribute_proportionally(
            total=Decimal('30'), weights=[Decimal('100'), Decimal('200')]
        )

        assert shares == (Decimal('10.00'), Decimal('20.00'))

    def test_largest_remainder_wins_leftover(self) -> None:
        # Exact shares 3.333.., 6.666..: the second seat has the larger remainder
        shares = distribute_proportionally(
            total=Decimal('10'), weights=[Decimal('1'), Decimal('2')]
        )

        assert shares == (Decimal('3.33'), Decimal('6.67'))

    @pytest.mark.parametrize(
        'total,weights',
        [
            (Decimal('0'), [Decimal('10'), Decimal('20')]),
            (Decimal('5'), [Decimal('0'), Decimal('0')]),
        ],
    )
    def test_nothing_to_distribute(self, total: Decimal, weights) -> None:
        assert distribute_proportionally(total=total, weights=weights) == (
            Decimal('0.00'),
            Decimal('0.00'),
        )

    def test_no_share_exceeds_its_weight(self) -> None:
        weights = [Decimal('0.01'), Decimal('99.99'), Decimal('45.50')]
        total = sum(weights)

        shares = distribute_proportionally(total=total, weights=weights)

        assert sum(shares) == total
        assert all(share <= weight for share, weight in zip(shares, weights))
