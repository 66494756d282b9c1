from abc import ABC, abstractmethod

from src.service.pricing.domain.enum.membership_tier import MembershipTier


class IUserMembershipQueryRepo(ABC):
    @abstractmethod
    async def get_membership_tier(self, *, user_id: int) -> MembershipTier:
        """Membership tier of the user, NONE for unknown users"""
        pass
