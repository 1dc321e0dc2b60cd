from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    TAX_RATE: float = Field(default=0.10, ge=0, le=1)
    CURRENCY_SYMBOL: str = "$"
    SIMULATED_DELAY_SECONDS: float = Field(default=1.5, ge=0)
    SUCCESS_RESET_SECONDS: float = Field(default=5.0, ge=0)
    SUBMIT_TIMEOUT_SECONDS: Optional[float] = Field(default=None, gt=0)
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CHECKOUT_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
