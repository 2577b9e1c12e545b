from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List, Literal


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/staffing.db"
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000"]

    # Celery configuration
    celery_broker_url: str = "redis://localhost:6379/0"
    celery_result_backend: str = "redis://localhost:6379/0"

    # Employee keyword recomputation: "sync" (awaited in-request)
    # or "background" (dispatched to Celery, not awaited)
    keyword_recompute_mode: Literal["sync", "background"] = "sync"

    # Search settings
    search_default_limit: int = 10
    search_max_limit: int = 500
    search_position_workers: int = 1  # >1 ranks positions concurrently
    search_timeout_seconds: float = 30.0

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
