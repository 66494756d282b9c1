from abc import ABC, abstractmethod
from typing import Optional

from src.service.pricing.domain.entity.coupon_entity import Coupon


class ICouponQueryRepo(ABC):
    @abstractmethod
    async def get_by_code(self, *, code: str) -> Optional[Coupon]:
        """
        Get coupon by its canonical (upper-case) code

        Returns:
            Coupon or None if no coupon has that code
        """
        pass
