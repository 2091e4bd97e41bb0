from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from hist_map.core.model import DEFAULT_APP_OPTIONS
from hist_map.core.staging import options_to_dict
from hist_map.ui.ids import IDs
from hist_map.ui.layout.build_filter_panel import build_filter_panel
from hist_map.ui.layout.build_map_panel import build_map_panel

if TYPE_CHECKING:
    from hist_map.ui.config import AppConfig


def build_navbar(ctx: "AppConfig") -> dbc.Navbar:
    cfg = ctx.global_config
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        dbc.Button(
                            "☰",
                            id=IDs.Control.DRAWER_OPEN_BTN,
                            color="secondary",
                            title="Настройки поиска",
                            className="me-3",
                        ),
                        html.Div(
                            [
                                html.H4(cfg.ui_title, className="mb-0"),
                                html.Small(cfg.subtitle, className="text-muted"),
                            ],
                            className="d-flex flex-column justify-content-center",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
            ],
        ),
        dark=cfg.theme == "dark",
        className="mb-2",
    )


def build_layout(ctx: "AppConfig"):
    initial = options_to_dict(DEFAULT_APP_OPTIONS)

    return dbc.Container(
        fluid=True,
        className="hm-root",
        children=[
            build_navbar(ctx),

            # Options live only for the page lifetime; nothing is persisted
            dcc.Store(id=IDs.Store.LIVE_OPTIONS, storage_type="memory", data=initial),
            dcc.Store(id=IDs.Store.STAGING_OPTIONS, storage_type="memory", data=initial),

            build_filter_panel(DEFAULT_APP_OPTIONS),
            build_map_panel(),
        ],
    )
