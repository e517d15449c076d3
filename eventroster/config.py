"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./eventroster.db"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Caller identity: HS256 tokens issued by the auth collaborator
    AUTH_JWT_SECRET: str = "dev-secret-change-me"
    AUTH_JWT_ALGORITHM: str = "HS256"
    AUTH_JWT_AUDIENCE: str = ""

    # Membership
    DEFAULT_EVENT_CAPACITY: int = 1000
    TRANSACTION_MAX_ATTEMPTS: int = 5
    TRANSACTION_BACKOFF_SECONDS: float = 0.02

    # Invite codes
    INVITE_CODE_LENGTH: int = 6
    INVITE_CODE_TTL_HOURS: int = 168  # 0 = never expires

    class Config:
        env_file = ".env"


settings = Settings()
