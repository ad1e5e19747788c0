from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    # Database settings.
    DATABASE_URL: str

    # JWT settings.
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Password reset settings.
    PASSWORD_RESET_EXPIRE_MINUTES: int = 60
    PASSWORD_RESET_URL: str = "http://localhost:3000/reset-password"

    # Mail delivery. Leave MAIL_API_URL empty to only log reset links.
    MAIL_API_URL: str = ""
    MAIL_API_KEY: str = ""
    MAIL_FROM: str = "no-reply@wallet-api.local"

    # App settings.
    APP_NAME: str = "Wallet API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    """
    return Settings()
