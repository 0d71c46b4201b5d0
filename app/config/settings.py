from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "TaskScheduler"
    debug: bool = True
    log_level: Optional[str] = None  # overrides the level implied by debug
    working_hours_start: int = Field(9, ge=0, le=23)
    working_hours_end: int = Field(17, ge=0, le=23)
    break_duration_minutes: int = 5
    max_tasks_per_day: int = 20
    respect_weekends: bool = True
    time_slot_duration_minutes: int = 15
    default_task_duration_minutes: int = 30
    timezone: Optional[str] = None  # IANA name, e.g. "Europe/Berlin"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
