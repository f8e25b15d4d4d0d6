# client/app/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    TG_BOT_TOKEN: str

    # Marketplace API
    API_URL: str = "http://localhost:5000"
    API_TIMEOUT: float = 10.0
    QUERY_CACHE_TTL: int = 60  # seconds

    # Marketplace web app (dashboards, legal pages)
    WEB_URL: str = "http://localhost:5000"

    # Booking drafts and user language
    REDIS_URL: str = "redis://localhost:6379/0"
    DRAFT_TTL: int = 60 * 60  # 1 hour

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )


settings = Settings()

BOT_TOKEN = settings.TG_BOT_TOKEN
