from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    DB_PATH: str = "ironnotes.db"
    SQL_ECHO: bool = False

    # Rest timer
    REST_TIMER_DURATION: int = Field(90, ge=10, le=600)
    TIMER_TICK_INTERVAL: float = Field(0.1, gt=0)

    # Display
    PREFERRED_UNIT: Literal["kg", "lb"] = "kg"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_PATH == ":memory:":
            return "sqlite+pysqlite:///:memory:"
        return f"sqlite+pysqlite:///{self.DB_PATH}"

@lru_cache
def get_settings() -> Settings:
    return Settings()
