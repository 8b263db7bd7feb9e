from __future__ import annotations

import json

import pytest

from conftest import FakeWeatherClient, InlineExecutor
from nowcast import cli
from nowcast.app import build_orchestrator
from nowcast.dispatch import immediate_dispatch
from nowcast.entities import Coordinate
from nowcast.errors import UrlError
from nowcast.location import IpLocationPlatform, LocationAuthority, StaticLocationPlatform
from nowcast.services import ForecastOrchestrator
from nowcast.settings import Settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("NOWCAST_OWM_API_KEY", "NOWCAST_LOCATION", "NOWCAST_HTTP_TIMEOUT", "NOWCAST_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def install_pipeline(monkeypatch, client: FakeWeatherClient) -> list:
    built = []

    def fake_build(settings, session=None):
        built.append(settings)
        return ForecastOrchestrator(
            location_authority=LocationAuthority(StaticLocationPlatform(settings.location)),
            weather_client=client,
            credential=settings.owm_api_key,
            executor=InlineExecutor(),
            dispatch=immediate_dispatch,
        )

    monkeypatch.setattr(cli, "build_orchestrator", fake_build)
    return built


def test_cli_prints_published_state(monkeypatch, capsys):
    monkeypatch.setenv("NOWCAST_OWM_API_KEY", "secret")
    client = FakeWeatherClient({41.0: "Istanbul"})
    built = install_pipeline(monkeypatch, client)

    assert cli.main(["--lat", "41.0", "--lon", "29.0"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["has_error"] is False
    assert payload["location_name"] == "Istanbul"
    assert payload["forecasts"][0]["local_time"] == "12:00"
    assert built[0].location.latitude == 41.0
    assert client.calls[0][1] == "secret"


def test_cli_exit_code_reflects_error_state(monkeypatch, capsys):
    install_pipeline(monkeypatch, FakeWeatherClient(error=UrlError("missing credential")))

    assert cli.main(["--lat", "41.0", "--lon", "29.0"]) == 1

    payload = json.loads(capsys.readouterr().out)
    assert payload["has_error"] is True
    assert payload["error_message"] == UrlError.user_message
    assert payload["location_name"] == ""


def test_cli_requires_both_coordinates():
    with pytest.raises(SystemExit) as info:
        cli.main(["--lat", "41.0"])

    assert info.value.code == 2


def test_build_orchestrator_prefers_configured_location():
    with build_orchestrator(Settings(owm_api_key="secret", location=Coordinate(41.0, 29.0))) as orchestrator:
        assert isinstance(orchestrator.location_authority._platform, StaticLocationPlatform)
        assert orchestrator.credential == "secret"
        assert orchestrator.weather_client.request_config.timeout == 10.0

    with build_orchestrator(Settings(http_timeout=3.0)) as orchestrator:
        assert isinstance(orchestrator.location_authority._platform, IpLocationPlatform)
        assert orchestrator.credential is None
        assert orchestrator.weather_client.request_config.timeout == 3.0
