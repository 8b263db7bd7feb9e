"""Weather Icons font glyphs for OpenWeatherMap condition codes."""
from __future__ import annotations

from typing import Dict, Tuple

NOT_AVAILABLE = "\uf07b"

# Condition group (id // 100, or the exact id for clear sky) -> (day, night).
_GLYPHS: Dict[int, Tuple[str, str]] = {
    2: ("\uf010", "\uf02d"),  # thunderstorm
    3: ("\uf00b", "\uf02b"),  # drizzle
    5: ("\uf008", "\uf028"),  # rain
    6: ("\uf00a", "\uf02a"),  # snow
    7: ("\uf003", "\uf04a"),  # fog, haze, dust
    800: ("\uf00d", "\uf02e"),  # clear
    8: ("\uf002", "\uf086"),  # clouds
}


def icon_glyph(condition_id: int, icon_code: str = "") -> str:
    key = condition_id if condition_id == 800 else condition_id // 100
    glyphs = _GLYPHS.get(key)
    if glyphs is None:
        return NOT_AVAILABLE
    day, night = glyphs
    return night if icon_code.endswith("n") else day


__all__ = ["NOT_AVAILABLE", "icon_glyph"]
