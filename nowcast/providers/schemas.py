"""Wire schemas for the remote services, validated with pydantic."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, FiniteFloat


class City(BaseModel):
    name: str
    country: str = ""


class MainReadings(BaseModel):
    temp: FiniteFloat  # Kelvin


class Condition(BaseModel):
    id: int
    icon: str


class ForecastItem(BaseModel):
    dt: FiniteFloat
    main: MainReadings
    weather: List[Condition] = Field(default_factory=list)

    @property
    def condition(self) -> Optional[Condition]:
        return self.weather[0] if self.weather else None


class ForecastResponse(BaseModel):
    city: City
    entries: List[ForecastItem] = Field(alias="list")


class GeoIpResponse(BaseModel):
    """Subset of the ip-api.com JSON payload."""

    status: str
    message: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    city: Optional[str] = None
    country_code: Optional[str] = Field(default=None, alias="countryCode")


__all__ = ["City", "Condition", "ForecastItem", "ForecastResponse", "GeoIpResponse", "MainReadings"]
