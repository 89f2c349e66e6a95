from typing import Set

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Bookshelf API"
    VERSION: str = "v1"
    DESCRIPTION: str = "A Rest API for Books and their Reviews"

    LOG_LEVEL: str = "INFO"

    # --- Database ---
    DATABASE_URL: str = "sqlite+aiosqlite:///./bookshelf.db"
    DB_ECHO: bool = False
    DB_CREATE_TABLES: bool = True

    # --- Redis Configuration ---
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_SOCKET_TIMEOUT: float = 1.0
    REDIS_CONNECT_TIMEOUT: float = 1.0
    REDIS_RECONNECT_INTERVAL: float = 5.0

    # --- Cache ---
    CACHE_ENABLED: bool = True
    CACHE_TTL: int = 300
    CACHE_OPERATION_TIMEOUT: float = 1.0

    # --- HTTP ---
    CORS_ORIGINS: str = "*"
    LOGGING_EXCLUDE_PATHS: Set[str] = {"/health", "/favicon.ico"}

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
