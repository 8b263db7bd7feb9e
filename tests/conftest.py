from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from requests_mock import Mocker

from nowcast.entities import AuthorizationState, Coordinate, ForecastEntry, WeatherSnapshot


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


class FakePlatform:
    """Location platform driven by the test through grant/deny/report/fail."""

    def __init__(self, state: AuthorizationState = AuthorizationState.NOT_DETERMINED) -> None:
        self.state = state
        self.delegate = None
        self.authorization_requests = 0
        self.location_requests = 0

    @property
    def authorization_state(self) -> AuthorizationState:
        return self.state

    def bind(self, delegate) -> None:
        self.delegate = delegate

    def request_authorization(self) -> None:
        self.authorization_requests += 1

    def request_location(self) -> None:
        self.location_requests += 1

    def change(self, state: AuthorizationState) -> None:
        self.state = state
        self.delegate.authorization_changed(state)

    def report(self, *coordinates: Coordinate) -> None:
        self.delegate.locations_updated(list(coordinates))

    def fail(self, error: Optional[BaseException] = None) -> None:
        self.delegate.location_failed(error)


class InlineExecutor(Executor):
    def submit(self, fn: Callable, *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        future.set_running_or_notify_cancel()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


class ManualExecutor(Executor):
    """Holds submitted work until the test runs it.

    Work counts as started on submission, like a request already on the wire,
    so it cannot be cancelled.
    """

    def __init__(self) -> None:
        self.pending: List[Tuple[Future, Callable, tuple, dict]] = []

    def submit(self, fn: Callable, *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        future.set_running_or_notify_cancel()
        self.pending.append((future, fn, args, kwargs))
        return future

    def run(self, index: int = 0) -> Future:
        future, fn, args, kwargs = self.pending.pop(index)
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


def make_snapshot(name: str, temperature: str = "21") -> WeatherSnapshot:
    return WeatherSnapshot(
        location_name=name,
        condition_code=800,
        icon_glyph="sun",
        temperature_display=temperature,
        forecasts=(ForecastEntry(local_time="12:00", icon_glyph="sun", temperature_display=temperature),),
    )


class FakeWeatherClient:
    """Returns a snapshot named after the requested latitude, or raises."""

    def __init__(self, names: Optional[Dict[float, str]] = None, error: Optional[Exception] = None) -> None:
        self.names = names or {}
        self.error = error
        self.calls: List[Tuple[Coordinate, Optional[str]]] = []

    def fetch(self, coordinate: Coordinate, credential: Optional[str]) -> WeatherSnapshot:
        self.calls.append((coordinate, credential))
        if self.error is not None:
            raise self.error
        return make_snapshot(self.names.get(coordinate.latitude, "Somewhere"))


@pytest.fixture
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture
def authorized_platform() -> FakePlatform:
    return FakePlatform(AuthorizationState.AUTHORIZED_FULL)


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture
def manual_executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def weather_client() -> FakeWeatherClient:
    return FakeWeatherClient({41.0: "Istanbul", 40.7: "New York"})
