from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Coordinate:
    """A position reported by a location platform, in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")


class AuthorizationState(Enum):
    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_LIMITED = "authorized_limited"
    AUTHORIZED_FULL = "authorized_full"

    @property
    def is_authorized(self) -> bool:
        return self in (AuthorizationState.AUTHORIZED_LIMITED, AuthorizationState.AUTHORIZED_FULL)

    @property
    def is_refused(self) -> bool:
        return self in (AuthorizationState.DENIED, AuthorizationState.RESTRICTED)


@dataclass(frozen=True)
class ForecastEntry:
    local_time: str
    icon_glyph: str
    temperature_display: str


@dataclass(frozen=True)
class WeatherSnapshot:
    """Normalized forecast result.

    Display values are already rendered: temperatures carry their unit glyph
    and forecast times are ``HH:mm`` strings in the local time zone.
    """

    location_name: str
    condition_code: int
    icon_glyph: str
    temperature_display: str
    forecasts: Tuple[ForecastEntry, ...] = ()


@dataclass(frozen=True)
class PublishedState:
    """Everything a presentation layer observes, replaced as one unit."""

    has_error: bool = False
    error_message: str = ""
    location_name: str = ""
    icon_glyph: str = ""
    temperature_display: str = ""
    forecasts: Tuple[ForecastEntry, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "PublishedState":
        return cls()

    @classmethod
    def from_snapshot(cls, snapshot: WeatherSnapshot) -> "PublishedState":
        return cls(
            has_error=False,
            error_message="",
            location_name=snapshot.location_name,
            icon_glyph=snapshot.icon_glyph,
            temperature_display=snapshot.temperature_display,
            forecasts=tuple(snapshot.forecasts),
        )

    @classmethod
    def from_error(cls, message: str) -> "PublishedState":
        # Data fields keep their reset defaults.
        return cls(has_error=True, error_message=message)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "has_error": self.has_error,
            "error_message": self.error_message,
            "location_name": self.location_name,
            "icon_glyph": self.icon_glyph,
            "temperature_display": self.temperature_display,
            "forecasts": [
                {
                    "local_time": entry.local_time,
                    "icon_glyph": entry.icon_glyph,
                    "temperature_display": entry.temperature_display,
                }
                for entry in self.forecasts
            ],
        }


__all__ = [
    "AuthorizationState",
    "Coordinate",
    "ForecastEntry",
    "PublishedState",
    "WeatherSnapshot",
]
