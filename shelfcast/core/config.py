from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    environment: str = "development"
    log_level: str = "INFO"

    # Remote estimation oracle (unset -> heuristics only)
    oracle_url: Optional[str] = None
    oracle_api_key: Optional[str] = None
    oracle_timeout_seconds: float = 5.0

    # Batch fan-out
    oracle_max_concurrency: int = 10

    # Item list status
    expiring_soon_days: int = 3

    @property
    def oracle_configured(self) -> bool:
        return bool(self.oracle_url)

    class Config:
        env_file = ".env"


settings = Settings()
