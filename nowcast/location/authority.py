"""Authorization-aware, single-flight access to a location platform.

A platform (an OS location service, an IP lookup, a fixed configuration)
reports through three callbacks: authorization changes, location fixes and
failures.  :class:`LocationAuthority` is the platform's only delegate and turns
that stream of events into one :class:`~concurrent.futures.Future` per
request.

Rules applied while a request is pending:

* a refusal (denied or restricted) fails the request with
  :class:`~nowcast.errors.AuthorizationDenied`;
* the first coordinate of the first fix batch resolves it;
* a platform failure fails it with :class:`~nowcast.errors.LocationUnavailable`.

Whichever signal is processed first wins; the rest are logged and dropped.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future
from threading import Lock
from typing import Optional, Protocol, Sequence

from ..entities import AuthorizationState, Coordinate
from ..errors import AuthorizationDenied, LocationUnavailable
from ..outcome import Outcome


logger = logging.getLogger(__name__)


class LocationDelegate(Protocol):
    def authorization_changed(self, state: AuthorizationState) -> None:
        ...

    def locations_updated(self, coordinates: Sequence[Coordinate]) -> None:
        ...

    def location_failed(self, error: Optional[BaseException] = None) -> None:
        ...


class LocationPlatform(Protocol):
    """Something that can grant permission and produce location fixes."""

    @property
    def authorization_state(self) -> AuthorizationState:
        ...

    def bind(self, delegate: LocationDelegate) -> None:
        """Register the object that receives every platform callback."""
        ...

    def request_authorization(self) -> None:
        ...

    def request_location(self) -> None:
        """Ask for a single fix; the answer arrives through the delegate."""
        ...


class LocationAuthority:
    def __init__(self, platform: LocationPlatform) -> None:
        self._platform = platform
        self._lock = Lock()
        self._state = platform.authorization_state
        self._pending: Optional[Outcome[Coordinate]] = None
        self._fix_requested = False
        platform.bind(self)

    @property
    def authorization_state(self) -> AuthorizationState:
        return self._state

    @property
    def has_pending_request(self) -> bool:
        with self._lock:
            return self._pending is not None

    # Public API ---------------------------------------------------------
    def resolve_location(self) -> Future:
        """Return a future for the current location.

        A call made while a request is outstanding shares that request's
        future instead of starting a second one.
        """
        with self._lock:
            if self._pending is not None:
                logger.debug("Location request already pending, reusing it")
                return self._pending.future
            outcome: Outcome[Coordinate] = Outcome()
            state = self._state
            if state.is_refused:
                refused = True
            else:
                refused = False
                self._pending = outcome
                self._fix_requested = state.is_authorized

        if refused:
            logger.info("Location authorization is %s, failing request", state.value)
            outcome.fail(AuthorizationDenied(f"authorization state is {state.value}"))
            return outcome.future

        try:
            if state.is_authorized:
                self._platform.request_location()
            else:
                logger.info("Location authorization not determined, asking the platform")
                self._platform.request_authorization()
        except Exception as exc:
            logger.error("Location platform rejected the request", exc_info=exc)
            self._settle_failure(LocationUnavailable("platform request failed"), cause=exc)
        return outcome.future

    def close(self) -> None:
        close = getattr(self._platform, "close", None)
        if callable(close):
            close()

    # Platform callbacks -------------------------------------------------
    def authorization_changed(self, state: AuthorizationState) -> None:
        request_fix = False
        claimed: Optional[Outcome[Coordinate]] = None
        with self._lock:
            previous, self._state = self._state, state
            if self._pending is not None:
                if state.is_refused:
                    claimed, self._pending = self._pending, None
                elif state.is_authorized and not self._fix_requested:
                    self._fix_requested = True
                    request_fix = True
        logger.info("Location authorization changed: %s -> %s", previous.value, state.value)

        if claimed is not None:
            claimed.fail(AuthorizationDenied(f"authorization state is {state.value}"))
        elif request_fix:
            try:
                self._platform.request_location()
            except Exception as exc:
                logger.error("Location platform rejected the fix request", exc_info=exc)
                self._settle_failure(LocationUnavailable("platform request failed"), cause=exc)

    def locations_updated(self, coordinates: Sequence[Coordinate]) -> None:
        claimed = self._claim()
        if claimed is None:
            logger.debug("Ignoring location fix with no outstanding request")
            return
        if not coordinates:
            claimed.fail(LocationUnavailable("platform reported an empty fix"))
            return
        claimed.resolve(coordinates[0])

    def location_failed(self, error: Optional[BaseException] = None) -> None:
        claimed = self._claim()
        if claimed is None:
            logger.debug("Ignoring location failure with no outstanding request: %s", error)
            return
        logger.warning("Location platform failed: %s", error)
        failure = LocationUnavailable(str(error) if error else "location unavailable")
        failure.__cause__ = error
        claimed.fail(failure)

    # Helpers ------------------------------------------------------------
    def _claim(self) -> Optional[Outcome[Coordinate]]:
        with self._lock:
            claimed, self._pending = self._pending, None
            self._fix_requested = False
        return claimed

    def _settle_failure(self, error: Exception, cause: BaseException) -> None:
        claimed = self._claim()
        if claimed is None:
            return
        error.__cause__ = cause
        claimed.fail(error)


__all__ = ["LocationAuthority", "LocationDelegate", "LocationPlatform"]
