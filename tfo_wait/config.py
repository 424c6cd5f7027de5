from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    # Endpoint
    TFO_API_URL: str
    TFO_API_LOG_TOKEN: str

    # Networking
    TIMEOUT_S: float = Field(default=30, gt=0)

    # Polling
    RUNNING_INTERVAL_S: int = Field(default=30, gt=0)
    COMPLETED_INTERVAL_S: int = Field(default=600, gt=0)
    EXIT_ON_COMPLETE: bool = Field(default=False)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}
