"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Appboy SDK endpoint (feedback + analytics events)
    appboy_endpoint: str = ""  # https://sdk.iad-01.appboy.com/api/v3
    appboy_api_key: str = ""
    device_id: str = ""
    http_timeout: float = 15.0

    # Open feedback forms (server-side sessions)
    form_session_ttl: float = 1800
    max_open_forms: int = 500

    # Inline field error strings, keyed by FormError value
    error_messages: dict[str, str] = {
        "invalid_message": "Please enter a message.",
        "empty_email": "Please enter your email address.",
        "invalid_email": "Please enter a valid email address.",
    }

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
