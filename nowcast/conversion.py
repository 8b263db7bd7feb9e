"""Display conversions for temperatures and forecast times."""
from __future__ import annotations

from datetime import datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

CELSIUS_GLYPH = "\uf03c"
FAHRENHEIT_GLYPH = "\uf045"

FAHRENHEIT_COUNTRIES = frozenset({"US"})


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def kelvin_to_celsius(kelvin: float) -> int:
    return round_half_away(kelvin - 273.15)


def kelvin_to_fahrenheit(kelvin: float) -> int:
    return round_half_away(kelvin * 9 / 5 - 459.67)


def format_temperature(kelvin: float, country: str) -> str:
    # The scale follows the reported city's country, not the device locale.
    if country in FAHRENHEIT_COUNTRIES:
        return f"{kelvin_to_fahrenheit(kelvin)}{FAHRENHEIT_GLYPH}"
    return f"{kelvin_to_celsius(kelvin)}{CELSIUS_GLYPH}"


def format_local_time(timestamp: float, tz: Optional[tzinfo] = None) -> str:
    """Render a unix timestamp as 24-hour ``HH:mm``; ``tz=None`` means local time."""
    moment = datetime.fromtimestamp(timestamp, tz=tz)
    return moment.strftime("%H:%M")


__all__ = [
    "CELSIUS_GLYPH",
    "FAHRENHEIT_GLYPH",
    "format_local_time",
    "format_temperature",
    "kelvin_to_celsius",
    "kelvin_to_fahrenheit",
    "round_half_away",
]
