"""Centralized configuration via pydantic-settings.

Credentials and transport knobs live here. Override any value via environment
variable (e.g., ``ALISMS_ENDPOINT=https://dysmsapi.ap-southeast-1.aliyuncs.com``).
Callers that manage credentials themselves can skip this module and pass them
to ``AliSMSClient`` directly.
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # --- Credentials ---
    ALISMS_ACCESS_KEY_ID: str = ""
    ALISMS_ACCESS_KEY_SECRET: SecretStr = SecretStr("")

    # --- Transport ---
    ALISMS_ENDPOINT: str = "https://dysmsapi.aliyuncs.com"
    ALISMS_TIMEOUT: float = 10.0  # seconds, per request

    model_config = {"env_prefix": "", "case_sensitive": True}

    @field_validator("ALISMS_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"ALISMS_TIMEOUT must be positive, got {v}")
        return v

    @field_validator("ALISMS_ENDPOINT")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def has_credentials(self) -> bool:
        return bool(
            self.ALISMS_ACCESS_KEY_ID and self.ALISMS_ACCESS_KEY_SECRET.get_secret_value()
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
