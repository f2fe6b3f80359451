import math
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from submission.utils import log

load_dotenv()

FALSY_VALUES = {"0", "false", "no", "off", ""}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    secret_word: str = ""
    log_endpoint: Optional[str] = None
    log_auth_token: Optional[str] = None
    log_timeout: Optional[float] = None
    cors_enabled: bool = True

    @field_validator("secret_word", mode="before")
    @classmethod
    def _strip_secret(cls, value):
        return (value or "").strip()

    @field_validator("log_endpoint", "log_auth_token", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            log(f"WARNING: LOG_TIMEOUT_SECONDS={value!r} is not a number; forwarding without a timeout")
            return None
        if not math.isfinite(timeout) or timeout <= 0:
            log(f"WARNING: LOG_TIMEOUT_SECONDS={value!r} must be positive; forwarding without a timeout")
            return None
        return timeout

    @classmethod
    def from_env(cls) -> "Settings":
        cors = os.getenv("CORS_ENABLED", "true").strip().lower()
        return cls(
            secret_word=os.getenv("SECRET_WORD"),
            log_endpoint=os.getenv("LOG_ENDPOINT"),
            log_auth_token=os.getenv("LOG_AUTH_TOKEN"),
            log_timeout=os.getenv("LOG_TIMEOUT_SECONDS"),
            cors_enabled=cors not in FALSY_VALUES,
        )


@lru_cache
def get_settings() -> Settings:
    """Settings are read once per process; the environment is not re-read."""
    return Settings.from_env()
