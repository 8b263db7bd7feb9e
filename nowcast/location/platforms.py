"""Location platforms usable without an OS location service."""
from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Optional

from pydantic import ValidationError

from .authority import LocationDelegate
from ..entities import AuthorizationState, Coordinate
from ..errors import LocationUnavailable, PipelineError
from ..providers.base import HttpProvider
from ..providers.schemas import GeoIpResponse


logger = logging.getLogger(__name__)


class StaticLocationPlatform:
    """Reports a fixed, configured coordinate."""

    def __init__(
        self,
        coordinate: Coordinate,
        authorization_state: AuthorizationState = AuthorizationState.AUTHORIZED_FULL,
    ) -> None:
        self.coordinate = coordinate
        self._state = authorization_state
        self._delegate: Optional[LocationDelegate] = None

    @property
    def authorization_state(self) -> AuthorizationState:
        return self._state

    def bind(self, delegate: LocationDelegate) -> None:
        self._delegate = delegate

    def request_authorization(self) -> None:
        if self._state is AuthorizationState.NOT_DETERMINED:
            self._state = AuthorizationState.AUTHORIZED_FULL
        if self._delegate is not None:
            self._delegate.authorization_changed(self._state)

    def request_location(self) -> None:
        if self._delegate is not None:
            self._delegate.locations_updated([self.coordinate])


class IpLocationPlatform(HttpProvider):
    """Coarse location from an IP geolocation service (ip-api.com format).

    An IP lookup never prompts anybody, so the platform reports limited
    authorization up front.  Lookups run on ``executor`` and report back
    through the bound delegate.
    """

    name = "ip-api"
    base_url = "http://ip-api.com/json/"

    def __init__(
        self,
        base_url: Optional[str] = None,
        executor: Optional[Executor] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="nowcast-geoip")
        self._owns_executor = executor is None
        self._delegate: Optional[LocationDelegate] = None

    @property
    def authorization_state(self) -> AuthorizationState:
        return AuthorizationState.AUTHORIZED_LIMITED

    def bind(self, delegate: LocationDelegate) -> None:
        self._delegate = delegate

    def request_authorization(self) -> None:
        if self._delegate is not None:
            self._delegate.authorization_changed(self.authorization_state)

    def request_location(self) -> None:
        self._executor.submit(self._deliver)

    def locate(self) -> Coordinate:
        response = self._request("GET", self.base_url)
        try:
            payload = GeoIpResponse.model_validate(self._json(response))
        except ValidationError as exc:
            raise LocationUnavailable("unexpected geolocation payload") from exc
        if payload.status != "success" or payload.lat is None or payload.lon is None:
            raise LocationUnavailable(payload.message or f"geolocation status {payload.status}")
        try:
            coordinate = Coordinate(payload.lat, payload.lon)
        except ValueError as exc:
            raise LocationUnavailable(str(exc)) from exc
        self._log.info("Located %s, %s via %s", payload.city or "unknown city", payload.country_code, self.name)
        return coordinate

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)
        super().close()

    def _deliver(self) -> None:
        delegate = self._delegate
        if delegate is None:
            logger.warning("Geolocation finished with no delegate bound")
            return
        try:
            coordinate = self.locate()
        except PipelineError as exc:
            delegate.location_failed(exc)
            return
        except Exception as exc:
            self._log.error("Geolocation lookup crashed", exc_info=exc)
            delegate.location_failed(exc)
            return
        delegate.locations_updated([coordinate])


__all__ = ["IpLocationPlatform", "StaticLocationPlatform"]
