from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Movie Pricing Engine'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    INTERNAL_API_TOKEN: SecretStr = SecretStr('test_internal_token_change_in_production')

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'movie_booking'
    POSTGRES_PORT: int = 5432

    # asyncpg pool
    ASYNCPG_POOL_MIN_SIZE: int = 5
    ASYNCPG_POOL_MAX_SIZE: int = 20
    ASYNCPG_POOL_COMMAND_TIMEOUT: float = 10.0  # seconds
    ASYNCPG_POOL_MAX_INACTIVE_LIFETIME: float = 300.0  # seconds
    ASYNCPG_POOL_TIMEOUT: float = 10.0  # connection acquire timeout (seconds)

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Pricing engine
    PRICING_STORE_BACKEND: Literal['postgres', 'memory'] = 'postgres'
    PRICING_TIMEZONE: str = 'Asia/Kolkata'
    PRICING_CACHE_TTL_SECONDS: float = 60.0
    MEMBERSHIP_DISCOUNT_PERCENT: Dict[str, Decimal] = {
        'NONE': Decimal('0'),
        'SILVER': Decimal('5'),
        'GOLD': Decimal('10'),
        'PLATINUM': Decimal('15'),
    }
    COUPON_SEAT_CATEGORY_MATCH: Literal['any', 'all'] = 'any'
    DEFAULT_OCCUPANCY_THRESHOLD_PERCENT: Decimal = Decimal('70')
    DEFAULT_POPULARITY_SCORE: int = 50
    CURRENCY_SYMBOL: str = '₹'


settings = Settings()  # type: ignore
