from __future__ import annotations

from datetime import timedelta, timezone

import pytest

from nowcast.conversion import (
    CELSIUS_GLYPH,
    FAHRENHEIT_GLYPH,
    format_local_time,
    format_temperature,
    kelvin_to_celsius,
    kelvin_to_fahrenheit,
    round_half_away,
)
from nowcast.icons import NOT_AVAILABLE, icon_glyph


def test_kelvin_conversions() -> None:
    assert kelvin_to_fahrenheit(300.0) == 80
    assert kelvin_to_celsius(300.0) == 27
    assert kelvin_to_celsius(273.15) == 0
    assert kelvin_to_fahrenheit(255.372) == 0


@pytest.mark.parametrize(
    "value, expected",
    [(2.5, 3), (-2.5, -3), (0.5, 1), (1.4, 1), (-1.6, -2), (-0.2, 0)],
)
def test_round_half_away_from_zero(value, expected) -> None:
    assert round_half_away(value) == expected


def test_scale_follows_country_code() -> None:
    assert format_temperature(300.0, "US") == "80" + FAHRENHEIT_GLYPH
    assert format_temperature(300.0, "TR") == "27" + CELSIUS_GLYPH
    assert format_temperature(300.0, "") == "27" + CELSIUS_GLYPH
    # Repeated conversion of the same input is stable.
    assert format_temperature(300.0, "US") == format_temperature(300.0, "US")


def test_format_local_time_is_24_hour() -> None:
    assert format_local_time(0, timezone.utc) == "00:00"
    assert format_local_time(13 * 3600 + 5 * 60, timezone.utc) == "13:05"
    assert format_local_time(0, timezone(timedelta(hours=3))) == "03:00"


def test_icon_glyph_distinguishes_day_and_night() -> None:
    assert icon_glyph(800, "01d") != icon_glyph(800, "01n")
    assert icon_glyph(501, "10d") == icon_glyph(500, "10d")
    assert icon_glyph(800, "01d") != icon_glyph(801, "02d")


def test_unknown_condition_has_placeholder_glyph() -> None:
    assert icon_glyph(999, "50d") == NOT_AVAILABLE
    assert icon_glyph(100) == NOT_AVAILABLE
