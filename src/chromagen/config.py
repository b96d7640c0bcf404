"""Runtime settings for ChromaGen.

Values come from ``CHROMAGEN_*`` environment variables or a ``.env`` file in
the working directory, e.g.::

    CHROMAGEN_STORE_TYPE=sqlite
    CHROMAGEN_SQLITE_PATH=/var/lib/chromagen/usage.db
    CHROMAGEN_AI_API_KEY=sk-...
    CHROMAGEN_TURNSTILE_SECRET_KEY=0x4AAAA...
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SEVEN_DAYS = 7 * 24 * 60 * 60


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreType(str, Enum):
    """Where usage records live.

    ``none`` runs without a store: the quota tracker then fails open on every
    call, so limits are advisory only.
    """

    MEMORY = "memory"
    SQLITE = "sqlite"
    NONE = "none"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHROMAGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "ChromaGen AI"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    log_level: LogLevel = LogLevel.INFO
    log_format: Literal["json", "console"] = "console"
    log_file: Path | None = None

    api_host: str = "127.0.0.1"
    api_port: int = Field(default=8000, ge=1, le=65535)
    api_reload: bool = False

    store_type: StoreType = StoreType.MEMORY
    sqlite_path: Path = Path("chromagen_usage.db")

    daily_free_quota: int = Field(default=3, ge=0)
    share_bonus: int = Field(default=1, ge=0)
    record_ttl_seconds: int = Field(
        default=SEVEN_DAYS,
        ge=1,
        description="How long a usage record outlives its last write",
    )
    usage_key_prefix: str = "ip:"

    turnstile_secret_key: str | None = None
    turnstile_verify_url: str = "https://challenges.cloudflare.com/turnstile/v0/siteverify"
    turnstile_timeout: float = Field(default=10.0, gt=0)

    # Any OpenAI-compatible chat completions endpoint.
    ai_api_key: str | None = None
    ai_base_url: str | None = None
    ai_model: str = "google/gemini-2.5-flash"
    ai_temperature: float = Field(default=0.7, ge=0, le=2)
    ai_max_tokens: int = Field(default=1000, ge=1)

    @model_validator(mode="after")
    def apply_environment_rules(self) -> "Settings":
        if self.environment is Environment.DEVELOPMENT:
            self.debug = True
        if self.environment is Environment.PRODUCTION and not self.turnstile_secret_key:
            raise ValueError("CHROMAGEN_TURNSTILE_SECRET_KEY is required in production")
        return self

    @property
    def skip_turnstile_when_unconfigured(self) -> bool:
        """Let CAPTCHA tokens through when no secret is set (dev and tests only)."""
        return self.environment in (Environment.DEVELOPMENT, Environment.TESTING)

    @property
    def is_production(self) -> bool:
        return self.environment is Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment is Environment.DEVELOPMENT


@lru_cache
def get_settings() -> Settings:
    """Settings loaded once per process; ``get_settings.cache_clear()`` reloads."""
    return Settings()
