from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from hist_map.config.model import GlobalConfig
from hist_map.core.model import ArtilleryHit, FrontLineGeoJSON
from hist_map.core.selection import SelectionCache
from hist_map.views.map_view import MapView


@dataclass
class AppConfig:
    config_root: Path
    global_config: GlobalConfig
    # Pre-loaded inputs; replaced only by building a new AppConfig
    hits: List[ArtilleryHit] = field(default_factory=list)
    front_lines: List[FrontLineGeoJSON] = field(default_factory=list)

    selection: SelectionCache = field(default_factory=SelectionCache)
    map_view: Optional[MapView] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.map_view is None:
            raise RuntimeError("AppConfig.map_view must be initialized.")
