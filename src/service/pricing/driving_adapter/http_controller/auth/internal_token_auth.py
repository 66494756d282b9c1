import hmac
from typing import Optional

from fastapi import Header

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError


async def require_internal_token(
    x_internal_token: Optional[str] = Header(None, alias='X-Internal-Token'),
) -> None:
    """Commit endpoint is for the booking workflow only, never the UI"""
    expected = settings.INTERNAL_API_TOKEN.get_secret_value()
    if not x_internal_token or not hmac.compare_digest(x_internal_token, expected):
        raise AuthenticationError('Invalid internal token')
