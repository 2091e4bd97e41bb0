from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from hist_map.config.io import load_data, load_global_config
from hist_map.views.map_view import MapView
from hist_map.ui.layout.build_layout import build_layout
from hist_map.ui.callbacks.callbacks_filters import register_filter_callbacks
from hist_map.ui.callbacks.callbacks_render import register_render_callbacks

logger = logging.getLogger(__name__)

BOOTSTRAP_THEME = {
    "dark": dbc.themes.DARKLY,
    "light": dbc.themes.FLATLY,
}


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Load Data (pre-loaded once; filtering never touches disk)
    hits, front_lines = load_data(global_config)
    if not hits and not front_lines:
        logger.warning("No hits or front lines loaded", extra={"config_root": str(config_root)})

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        hits=hits,
        front_lines=front_lines,
        map_view=MapView(
            map_style=global_config.map_style,
            center=global_config.map_center,
            zoom=global_config.map_zoom,
        ),
    )
    ctx.validate()

    app = Dash(
        __name__,
        external_stylesheets=[BOOTSTRAP_THEME[global_config.theme]],
    )
    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_filter_callbacks(app, ctx)
    register_render_callbacks(app, ctx)

    return app
