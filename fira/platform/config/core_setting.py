from pathlib import Path
from typing import List

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

    PROJECT_NAME: str = 'FIRA Marketplace'
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

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'fira'
    POSTGRES_PASSWORD: SecretStr = SecretStr('fira')
    POSTGRES_DB: str = 'fira_marketplace'

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30  # seconds
    DB_POOL_RECYCLE: int = 3600  # seconds
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Razorpay gateway (unset keys disable payment operations at call time)
    RAZORPAY_KEY_ID: str | None = None
    RAZORPAY_KEY_SECRET: SecretStr | None = None
    PAYMENT_GATEWAY_TIMEOUT: float = 10.0  # seconds
    PAYMENT_CURRENCY: str = 'INR'

    # Marketplace money rules (percentages)
    PLATFORM_FEE_PERCENTAGE: int = 5
    BOOKING_ADVANCE_PERCENTAGE: int = 10

    # Event dates/times are entered as local wall-clock time in this zone
    EVENT_TIMEZONE: str = 'Asia/Kolkata'

    # Ticket refund policy
    REFUND_FULL_HOURS: int = 168  # 7 days before start
    REFUND_PARTIAL_HOURS: int = 48
    REFUND_PARTIAL_PERCENTAGE: int = 50

    # Notifications
    NOTIFICATION_LIST_LIMIT: int = 50

    @property
    def payment_gateway_configured(self) -> bool:
        return bool(self.RAZORPAY_KEY_ID and self.RAZORPAY_KEY_SECRET)


settings = Settings()  # type: ignore
