"""
Configuration for the CoFound core services.

Loads environment variables from .env file and exposes them as a single
immutable Settings object that is passed into service constructors.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_APP_URL = "https://cofound.centralasia.com"
DEFAULT_TELEGRAM_API_BASE = "https://api.telegram.org"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration shared by the dispatcher, verifier and clients."""

    telegram_bot_token: str = ""
    telegram_bot_username: str = ""
    app_url: str = DEFAULT_APP_URL
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    telegram_api_base: str = DEFAULT_TELEGRAM_API_BASE
    telegram_timeout: float = 10.0
    auth_max_age: int = 86400
    cors_origins: tuple[str, ...] = ("*",)

    def __post_init__(self):
        # Deep links are built as f"{app_url}/path"
        object.__setattr__(self, "app_url", (self.app_url or DEFAULT_APP_URL).rstrip("/"))
        object.__setattr__(self, "telegram_api_base", self.telegram_api_base.rstrip("/"))

    @property
    def telegram_configured(self) -> bool:
        return bool(self.telegram_bot_token)

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)


def _env(*names: str, default: str = "") -> str:
    for name in names:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return default


def _env_number(name: str, default, cast):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        return default


def load_settings() -> Settings:
    """Build Settings from the process environment (and .env if present)."""
    load_dotenv()

    origins = [o.strip() for o in _env("CORS_ORIGINS", default="*").split(",") if o.strip()]

    return Settings(
        telegram_bot_token=_env("TELEGRAM_BOT_TOKEN"),
        telegram_bot_username=_env("TELEGRAM_BOT_USERNAME", "NEXT_PUBLIC_TELEGRAM_BOT_USERNAME"),
        app_url=_env("APP_URL", "NEXT_PUBLIC_APP_URL", default=DEFAULT_APP_URL),
        supabase_url=_env("SUPABASE_URL"),
        supabase_service_role_key=_env("SUPABASE_SERVICE_ROLE_KEY"),
        telegram_api_base=_env("TELEGRAM_API_BASE", default=DEFAULT_TELEGRAM_API_BASE),
        telegram_timeout=_env_number("TELEGRAM_TIMEOUT", 10.0, float),
        auth_max_age=_env_number("TELEGRAM_AUTH_MAX_AGE", 86400, int),
        cors_origins=tuple(origins) or ("*",),
    )
