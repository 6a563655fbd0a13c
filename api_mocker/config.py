from __future__ import annotations

from pydantic import BaseModel
from dotenv import load_dotenv
import os

load_dotenv()


class Settings(BaseModel):
    url: str = os.getenv("API_MOCKER_URL", "http://localhost:8080")
    log_level: str = os.getenv("API_MOCKER_LOG_LEVEL", "WARNING")


settings = Settings()
