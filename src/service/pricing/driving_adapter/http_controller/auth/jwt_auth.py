from typing import Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError


class JwtAuth:
    """Reads the booking app's session token; issuing tokens stays with the booking app"""

    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    def get_user_id_from_jwt(self, token: Optional[str]) -> Optional[int]:
        if not token:
            return None

        payload = self.decode_jwt_token(token)
        user_id = payload.get('user_id') or payload.get('sub')
        try:
            return int(user_id)
        except (TypeError, ValueError):
            raise AuthenticationError('Invalid token')
