from decimal import Decimal
from pathlib import Path
from typing import Dict, List

from pydantic import field_validator
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

    PROJECT_NAME: str = 'Event Marketplace'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

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

    # Database (postgresql+asyncpg://... in production)
    DATABASE_URL: str = 'sqlite+aiosqlite:///./marketplace.db'
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    DB_ECHO: bool = False

    @property
    def DATABASE_IS_SQLITE(self) -> bool:
        return self.DATABASE_URL.startswith('sqlite')

    # Checkout
    SERVICE_FEE_RATE: Decimal = Decimal('0.10')  # buyer-side fee on subtotal
    HALF_PRICE_FACTOR: Decimal = Decimal('0.5')

    # Refund policy
    REFUND_WINDOW_DAYS: int = 7
    REFUND_PROCESSING_FEE_RATE: Decimal = Decimal('0.10')  # retained on approval

    # Platform commission, in percent
    DEFAULT_COMMISSION_RATE: Decimal = Decimal('5')
    CATEGORY_COMMISSION_RATES: Dict[str, Decimal] = {
        'music': Decimal('5'),
        'theater': Decimal('4'),
        'sports': Decimal('6'),
        'conference': Decimal('5'),
    }

    # Inventory
    RESERVATION_TTL_SECONDS: int = 900
    RESERVATION_SWEEP_INTERVAL_SECONDS: float = 30.0
    INVENTORY_LOCK_TIMEOUT_SECONDS: float = 2.0


settings = Settings()  # type: ignore
