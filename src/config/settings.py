from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]

    ENVIRONMENT: str = "Production"

    # Airtable
    airtable_api_url: str = "https://api.airtable.com/v0"
    airtable_api_key: str = ""
    airtable_base_id: str = "appVYdeqjVvBqzrqd"

    # Demo mode serves lookups and submissions from the in-memory fixture
    demo_mode: bool = False
    demo_latency_seconds: float = 1.0

    # Used by the CLI form session
    rsvp_api_url: str = "http://localhost:8000"

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
