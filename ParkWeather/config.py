"""Configuration loaded from the environment / .env file."""
import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from openweather_provider import mask_key


@dataclass(frozen=True)
class Settings:
    openweather_api_key: Optional[str]
    nps_api_key: Optional[str]
    timeout: int = 10
    current_ttl: float = 600
    forecast_ttl: float = 3600
    image_ttl: float = 86400
    rate_limit_cooldown: float = 60
    max_failures: int = 3
    failure_reset: float = 300


def get_env(name: str) -> Optional[str]:
    """Trimmed value of an environment variable; blank counts as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _number(name: str, default, cast=float):
    value = get_env(name)
    if value is None:
        return default
    try:
        number = cast(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid {name}: {value!r}") from exc
    if not math.isfinite(number) or number <= 0:
        raise SystemExit(f"Invalid {name}: {value!r} (must be a positive number)")
    return number


def log_key_status(name: str, value: Optional[str]) -> None:
    if value:
        logging.info("%s is set (length: %s, format: %s)", name, len(value), mask_key(value))
    else:
        logging.warning("%s is not set; simulated data will be used", name)


def load_config() -> Settings:
    load_dotenv()

    settings = Settings(
        openweather_api_key=get_env("OPENWEATHER_API_KEY"),
        nps_api_key=get_env("NPS_API_KEY"),
        timeout=_number("PARK_WEATHER_TIMEOUT", 10, int),
        current_ttl=_number("PARK_WEATHER_CURRENT_TTL", 600),
        forecast_ttl=_number("PARK_WEATHER_FORECAST_TTL", 3600),
        image_ttl=_number("PARK_WEATHER_IMAGE_TTL", 86400),
        rate_limit_cooldown=_number("PARK_WEATHER_RATE_LIMIT_COOLDOWN", 60),
        max_failures=_number("PARK_WEATHER_MAX_FAILURES", 3, int),
        failure_reset=_number("PARK_WEATHER_FAILURE_RESET", 300),
    )

    log_key_status("OPENWEATHER_API_KEY", settings.openweather_api_key)
    log_key_status("NPS_API_KEY", settings.nps_api_key)
    logging.info(
        "Configuration loaded: timeout=%ss ttl(current/forecast/images)=%s/%s/%s",
        settings.timeout,
        settings.current_ttl,
        settings.forecast_ttl,
        settings.image_ttl,
    )
    return settings
