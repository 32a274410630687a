# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Literal, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./parcel_delivery.db"
    # Refuse to start when the store cannot be reached
    DB_FAIL_FAST: bool = True

    # Identity provider used to verify bearer tokens
    IDENTITY_PROVIDER: Literal["firebase", "jwt"] = "jwt"
    FIREBASE_CREDENTIALS: Optional[str] = None
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    STRIPE_SECRET_KEY: str = ""
    STRIPE_API_URL: str = "https://api.stripe.com"
    STRIPE_TIMEOUT: float = 10.0
    PAYMENT_CURRENCY: str = "usd"

    RIDER_CANCEL_PENDING_ONLY: bool = False

    FRONTEND_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
