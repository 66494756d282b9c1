from decimal import Decimal
from typing import List, Sequence, Tuple

from src.service.pricing.domain.value_object.money import (
    ZERO,
    from_minor_units,
    to_minor_units,
)


def distribute_proportionally(*, total: Decimal, weights: Sequence[Decimal]) -> Tuple[Decimal, ...]:
    """
    Split `total` across `weights` proportionally, in whole minor units.

    Largest-remainder method: every share is floored, then the leftover units go one
    each to the largest remainders (earlier position wins a tie). The shares always
    sum to `total` exactly and no share exceeds its weight when total <= sum(weights).
    """
    total_units = to_minor_units(total)
    weight_units = [max(to_minor_units(weight), 0) for weight in weights]
    weight_sum = sum(weight_units)
    if total_units <= 0 or weight_sum <= 0:
        return tuple(ZERO for _ in weights)

    shares: List[int] = []
    remainders: List[Tuple[int, int]] = []
    for index, units in enumerate(weight_units):
        share, remainder = divmod(total_units * units, weight_sum)
        shares.append(share)
        remainders.append((remainder, index))

    leftover = total_units - sum(shares)
    for _, index in sorted(remainders, key=lambda item: (-item[0], item[1]))[:leftover]:
        shares[index] += 1

    return tuple(from_minor_units(units) for units in shares)
