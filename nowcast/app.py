"""Wires settings into a ready-to-run pipeline."""
from __future__ import annotations

from typing import Optional

import requests

from .location import IpLocationPlatform, LocationAuthority, StaticLocationPlatform
from .providers import OpenWeatherMapClient, RequestConfig
from .services import ForecastOrchestrator
from .settings import Settings


def build_orchestrator(settings: Settings, session: Optional[requests.Session] = None) -> ForecastOrchestrator:
    session = session or requests.Session()
    request_config = RequestConfig(timeout=settings.http_timeout)
    if settings.location is not None:
        platform = StaticLocationPlatform(settings.location)
    else:
        platform = IpLocationPlatform(
            base_url=settings.geoip_url, session=session, request_config=request_config
        )
    client = OpenWeatherMapClient(base_url=settings.owm_url, session=session, request_config=request_config)
    return ForecastOrchestrator(
        location_authority=LocationAuthority(platform),
        weather_client=client,
        credential=settings.owm_api_key,
    )


__all__ = ["build_orchestrator"]
