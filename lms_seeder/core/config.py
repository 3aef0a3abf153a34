"""
LMS Seeder - Configuration
All settings are read from environment variables (or .env file).
Nothing is loaded at import time: commands call load_settings() first.
"""
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError
from pydantic_settings import BaseSettings, SettingsConfigDict

# pydantic error types that mean "the operator did not supply a value"
MISSING_ERROR_TYPES = {"missing", "blank"}


class ConfigurationError(Exception):
    """Base for configuration problems detected before any work starts."""


class ConfigurationMissing(ConfigurationError):
    """Raised when required environment values are absent or blank."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing {' or '.join(missing)} in environment/.env")


class ConfigurationInvalid(ConfigurationError):
    """Raised when a value is present but cannot be used."""

    def __init__(self, problems: dict[str, str]):
        self.problems = problems
        super().__init__("; ".join(f"Invalid {name}: {msg}" for name, msg in problems.items()))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Logging ──────────────────────────────────────────────
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # ── Remote store (PostgREST / Supabase) ──────────────────
    SUPABASE_URL: str
    SUPABASE_SERVICE_ROLE_KEY: str
    USERS_TABLE: str = "users"
    HTTP_TIMEOUT_SECONDS: float = Field(10.0, gt=0)

    # ── Seed accounts ─────────────────────────────────────────
    SEED_PASSWORD: str = "admin123"
    BCRYPT_ROUNDS: int = Field(10, ge=4, le=31)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise PydanticCustomError("blank", "must not be blank")
        return v

    @property
    def rest_url(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/rest/v1"


def load_settings(env_file: str | None = ".env") -> Settings:
    """Build Settings from the environment, or raise a ConfigurationError."""
    try:
        return Settings(_env_file=env_file)
    except ValidationError as exc:
        missing: list[str] = []
        problems: dict[str, str] = {}
        for err in exc.errors():
            name = str(err["loc"][0]) if err["loc"] else "settings"
            if err["type"] in MISSING_ERROR_TYPES:
                missing.append(name)
            else:
                problems[name] = err["msg"]
        if missing:
            raise ConfigurationMissing(missing) from exc
        raise ConfigurationInvalid(problems) from exc
