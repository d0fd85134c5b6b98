"""Configuration management."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .exceptions import ConfigError

load_dotenv()

DEFAULT_API_BASE_URL = "https://api.telegram.org"
DEFAULT_TIMEOUT_SECONDS = 30.0
# Windows PowerShell's AppUserModelID; lets an unregistered script raise toasts.
DEFAULT_TOAST_APP_ID = (
    "{1AC14E77-02E7-4E5D-B744-2EB1AE5198B7}\\WindowsPowerShell\\v1.0\\powershell.exe"
)


@dataclass
class TelegramConfig:
    """Telegram Bot API configuration."""
    bot_token: str
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS  # seconds


@dataclass
class ToastConfig:
    """Toast notification configuration."""
    app_id: str = DEFAULT_TOAST_APP_ID


@dataclass
class AppConfig:
    """Complete application configuration."""
    telegram: TelegramConfig
    toast: ToastConfig


def _parse_float_env(key: str, default: float) -> float:
    """Parse a float from an environment variable."""
    value = os.getenv(key, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigError(f"{key} must be a number, got {value!r}") from e


def load_config() -> AppConfig:
    """
    Load configuration from environment variables.

    The bot token is read as-is; an empty token is allowed and surfaces
    later as a rejected API call.

    Raises:
        ConfigError: If a numeric setting cannot be parsed.
    """
    bot_token = os.getenv("TELEGRAM_BOT_TOKEN", "")
    api_base_url = os.getenv("TELEGRAM_API_BASE_URL") or DEFAULT_API_BASE_URL
    timeout = _parse_float_env("TELEGRAM_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)
    if timeout <= 0:
        raise ConfigError(f"TELEGRAM_TIMEOUT must be positive, got {timeout}")

    app_id = os.getenv("TOAST_APP_ID") or DEFAULT_TOAST_APP_ID

    return AppConfig(
        telegram=TelegramConfig(
            bot_token=bot_token,
            api_base_url=api_base_url.rstrip("/"),
            timeout=timeout,
        ),
        toast=ToastConfig(
            app_id=app_id,
        ),
    )
