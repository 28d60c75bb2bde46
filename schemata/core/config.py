from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Validation
    DEFAULT_SET: str = "all"
    MAX_CONCURRENT_VALIDATIONS: int | None = None  # Per array property; None is unbounded

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False  # True for structured JSON, False for colored console output

    model_config = SettingsConfigDict(
        env_prefix="SCHEMATA_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

# 'all' is reserved as the default validator set
DEFAULT_SET = settings.DEFAULT_SET
