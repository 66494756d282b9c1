from typing import Iterable

from src.platform.exception.exceptions import DomainError


class InvalidSeatSelectionError(DomainError):
    """Empty, duplicated or foreign seat ids - no quote is produced"""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)

    @classmethod
    def unknown_seats(
        cls, *, showtime_id: int, seat_ids: Iterable[int]
    ) -> 'InvalidSeatSelectionError':
        ids = ', '.join(str(seat_id) for seat_id in sorted(seat_ids))
        return cls(f'Seats [{ids}] do not belong to the screen of showtime {showtime_id}')
