from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from hist_map.core.model import Position

THEMES = ("dark", "light")

# Map styles per theme; both are token-free carto styles
MAP_STYLE_BY_THEME = {
    "dark": "carto-darkmatter",
    "light": "carto-positron",
}

DEFAULT_CENTER = Position(lat=59.9386, lng=30.3141)
DEFAULT_ZOOM = 11.0


@dataclass
class GlobalConfig:
    """
    Parsed global.json.

    - hits_file: JSON array of hit records
    - front_lines_dir: directory scanned for *.geojson front-line collections
    - theme: "dark" or "light"; picks both the Bootstrap theme and the map style
    """
    hits_file: Path
    front_lines_dir: Optional[Path]
    ui_title: str = "Карта обстрелов"
    subtitle: str = "Historical strike map"
    theme: str = "dark"
    map_center: Position = field(default_factory=lambda: DEFAULT_CENTER)
    map_zoom: float = DEFAULT_ZOOM

    @property
    def map_style(self) -> str:
        return MAP_STYLE_BY_THEME[self.theme]
