"""Pydantic Settings: fetch limits, extraction caps and logging level from the environment."""

from functools import lru_cache

from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    fetch_timeout_seconds: float = 5.0
    max_html_bytes: int = 500_000
    max_redirects: int = 3
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "ja,en;q=0.9"

    max_images: int = 30
    harvest_target_colors: int = 16
    palette_target_colors: int = 20
    palette_min_css_colors: int = 3

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
