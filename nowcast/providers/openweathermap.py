"""OpenWeatherMap 5 day / 3 hour forecast client."""
from __future__ import annotations

import logging
from datetime import tzinfo
from typing import List, Optional

from pydantic import ValidationError

from .base import HttpProvider
from .schemas import ForecastItem, ForecastResponse
from ..conversion import format_local_time, format_temperature
from ..entities import Coordinate, ForecastEntry, WeatherSnapshot
from ..errors import ParsingFailed, UrlError
from ..icons import icon_glyph


class OpenWeatherMapClient(HttpProvider):
    """Fetches one forecast per call and renders it for display."""

    name = "openweathermap"
    base_url = "https://api.openweathermap.org/data/2.5/forecast"
    units = "metric"
    forecast_limit = 4

    def __init__(
        self,
        base_url: Optional[str] = None,
        timezone: Optional[tzinfo] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url
        # None renders forecast times in the process' local zone.
        self.timezone = timezone
        self._log = logging.getLogger(self.__class__.__name__)

    def fetch(self, coordinate: Coordinate, credential: Optional[str]) -> WeatherSnapshot:
        url = self.request_url(coordinate, credential)
        response = self._request("GET", url)
        payload = self._decode(self._json(response))
        snapshot = self._build_snapshot(payload)
        self._log.info(
            "Fetched forecast for %s (%d entries)", snapshot.location_name, len(snapshot.forecasts)
        )
        return snapshot

    def request_url(self, coordinate: Coordinate, credential: Optional[str]) -> str:
        if not credential or not credential.strip():
            self._log.error("No OpenWeatherMap credential configured")
            raise UrlError("missing credential")
        params = {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "appid": credential.strip(),
            "units": self.units,
        }
        return self.build_url(self.base_url, params)

    # helpers ------------------------------------------------------------
    def _decode(self, data: object) -> ForecastResponse:
        try:
            payload = ForecastResponse.model_validate(data)
        except ValidationError as exc:
            self._log.error("Forecast payload does not match schema: %s", exc)
            raise ParsingFailed("unexpected forecast payload") from exc
        if not payload.entries:
            raise ParsingFailed("forecast payload has no entries")
        if payload.entries[0].condition is None:
            raise ParsingFailed("current entry has no weather condition")
        return payload

    def _build_snapshot(self, payload: ForecastResponse) -> WeatherSnapshot:
        try:
            return self._render(payload)
        except (ArithmeticError, ValueError, OSError) as exc:
            # Values the schema accepts but the display conversions cannot render.
            self._log.error("Forecast values cannot be rendered: %s", exc)
            raise ParsingFailed("unrenderable forecast values") from exc

    def _render(self, payload: ForecastResponse) -> WeatherSnapshot:
        country = payload.city.country
        current = payload.entries[0]
        condition = current.condition
        forecasts: List[ForecastEntry] = []
        for item in payload.entries[: self.forecast_limit]:
            entry = self._build_entry(item, country)
            if entry is not None:
                forecasts.append(entry)
        return WeatherSnapshot(
            location_name=payload.city.name,
            condition_code=condition.id,
            icon_glyph=icon_glyph(condition.id, condition.icon),
            temperature_display=format_temperature(current.main.temp, country),
            forecasts=tuple(forecasts),
        )

    def _build_entry(self, item: ForecastItem, country: str) -> Optional[ForecastEntry]:
        condition = item.condition
        if condition is None:
            self._log.debug("Skipping forecast entry at %s without a condition", item.dt)
            return None
        return ForecastEntry(
            local_time=format_local_time(item.dt, self.timezone),
            icon_glyph=icon_glyph(condition.id, condition.icon),
            temperature_display=format_temperature(item.main.temp, country),
        )


__all__ = ["OpenWeatherMapClient"]
