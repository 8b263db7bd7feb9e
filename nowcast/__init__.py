"""Current-location weather forecast pipeline."""
from .entities import AuthorizationState, Coordinate, ForecastEntry, PublishedState, WeatherSnapshot
from .errors import (
    AuthorizationDenied,
    LocationUnavailable,
    NetworkRequestFailed,
    ParsingFailed,
    PipelineError,
    SerializationFailed,
    UrlError,
)
from .observable import ObservableValue

__version__ = "0.1.0"

__all__ = [
    "AuthorizationDenied",
    "AuthorizationState",
    "Coordinate",
    "ForecastEntry",
    "LocationUnavailable",
    "NetworkRequestFailed",
    "ObservableValue",
    "ParsingFailed",
    "PipelineError",
    "PublishedState",
    "SerializationFailed",
    "UrlError",
    "WeatherSnapshot",
]
