"""Environment driven settings."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .entities import Coordinate
from .errors import ImproperlyConfigured

DEFAULT_OWM_URL = "https://api.openweathermap.org/data/2.5/forecast"
DEFAULT_GEOIP_URL = "http://ip-api.com/json/"


def env(name: str, default: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    source = os.environ if environ is None else environ
    value = source.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


def parse_location(value: str) -> Coordinate:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise ImproperlyConfigured(f"Location must look like 'lat,lon', got {value!r}")
    try:
        return Coordinate(float(parts[0]), float(parts[1]))
    except ValueError as exc:
        raise ImproperlyConfigured(f"Invalid location {value!r}: {exc}") from exc


@dataclass(frozen=True)
class Settings:
    owm_api_key: Optional[str] = None
    owm_url: str = DEFAULT_OWM_URL
    http_timeout: float = 10.0
    location: Optional[Coordinate] = None
    geoip_url: str = DEFAULT_GEOIP_URL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        # The credential stays optional: a missing key surfaces as a UrlError
        # at fetch time rather than stopping the process here.
        api_key = env("NOWCAST_OWM_API_KEY", "", environ).strip() or None
        raw_timeout = env("NOWCAST_HTTP_TIMEOUT", "10", environ)
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ImproperlyConfigured(f"NOWCAST_HTTP_TIMEOUT must be a number, got {raw_timeout!r}") from exc
        if timeout <= 0:
            raise ImproperlyConfigured("NOWCAST_HTTP_TIMEOUT must be positive")
        raw_location = env("NOWCAST_LOCATION", "", environ).strip()
        return cls(
            owm_api_key=api_key,
            owm_url=env("NOWCAST_OWM_URL", DEFAULT_OWM_URL, environ),
            http_timeout=timeout,
            location=parse_location(raw_location) if raw_location else None,
            geoip_url=env("NOWCAST_GEOIP_URL", DEFAULT_GEOIP_URL, environ),
            log_level=env("NOWCAST_LOG_LEVEL", "INFO", environ).upper(),
        )


__all__ = ["DEFAULT_GEOIP_URL", "DEFAULT_OWM_URL", "Settings", "env", "parse_location"]
