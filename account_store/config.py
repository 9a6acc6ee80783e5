from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    # Backend selection
    STORE_BACKEND: Literal["relational", "document"] = "relational"
    RELATIONAL_REQUIRED: bool = False

    # Relational
    DATABASE_URL: str = "sqlite:///./data/auth.db"

    # Document fallback
    JSON_STORE_PATH: str = "./data/auth.json"

    # First-run bootstrap (hash is precomputed by the caller)
    DEFAULT_USERNAME: str = ""
    DEFAULT_PASSWORD_HASH: str = ""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True



@lru_cache
def get_settings() -> Settings:
    return Settings()
