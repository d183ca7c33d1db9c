from __future__ import annotations

import os
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv


load_dotenv()


class Settings(BaseSettings):
    DB_URL: str = Field(default=os.getenv("DB_URL", "sqlite:///./fieldops.db"))
    REDIS_URL: str = Field(default=os.getenv("REDIS_URL", "redis://redis:6379/0"))
    LOG_LEVEL: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))

    # Reference location whose geofence classifies presence samples
    HOME_BASE_NAME: str = Field(default=os.getenv("HOME_BASE_NAME", "Chitila"))

    GPS_REFRESH_JOB_TIMEOUT: int = Field(
        default=int(os.getenv("GPS_REFRESH_JOB_TIMEOUT", "600"))
    )
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )

    model_config = SettingsConfigDict(case_sensitive=False)


settings = Settings()
