from __future__ import annotations

import dash_bootstrap_components as dbc

from dash import dcc, html

from hist_map.ui.ids import IDs


def build_map_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardBody(
                [
                    dcc.Loading(
                        id="map-graph-loading",
                        type="default",
                        children=dcc.Graph(
                            id=IDs.Control.MAP_GRAPH,
                            style={"height": "calc(100vh - 170px)"},
                            config={"responsive": True, "scrollZoom": True},
                        ),
                    ),
                    html.Div(
                        [
                            html.Div(id=IDs.Control.STATUS_BAR, className="small text-muted"),
                            dbc.Button(
                                "Скачать попадания (CSV)",
                                id=IDs.Control.DOWNLOAD_DATA_BTN,
                                color="secondary",
                                size="sm",
                                className="mt-2 ms-auto",
                            ),
                            dcc.Download(id=IDs.Control.DOWNLOAD_DATA),
                        ],
                        className="d-flex justify-content-between align-items-center",
                    ),
                ],
                className="p-2",
            ),
        ],
        className="hm-maincard",
    )
