from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "StudyDeck"
    database_url: str = "sqlite:///./studydeck.db"
    log_level: str = "INFO"
    log_json: bool = True
    user_header: str = "X-User-Id"

    model_config = SettingsConfigDict(env_prefix="STUDYDECK_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
