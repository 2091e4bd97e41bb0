from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
import plotly.graph_objects as go
from dash import Input, Output, State, dcc, html

from hist_map.core.selection import Selection
from hist_map.core.staging import options_from_dict
from hist_map.ui.ids import IDs

if TYPE_CHECKING:
    from hist_map.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}\n\n{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def _error_figure(details: str) -> go.Figure:
    return _message_figure("Не удалось построить карту.", details)


def _status_text(selection: Selection, n_hits: int, n_front_lines: int):
    return html.Span(
        [
            html.Strong("Попадания: "), f"{len(selection.hits)} из {n_hits}", " • ",
            html.Strong("Линии фронта: "), f"{len(selection.front_lines)} из {n_front_lines}",
        ]
    )


def _select(ctx: AppConfig, live_data: Optional[dict[str, Any]]) -> Selection:
    options = options_from_dict(live_data or {})
    return ctx.selection.select(ctx.hits, ctx.front_lines, options)


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Map: live options -> figure + status
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.MAP_GRAPH, "figure"),
        Output(IDs.Control.STATUS_BAR, "children"),
        Input(IDs.Store.LIVE_OPTIONS, "data"),
    )
    def update_map_from_options(live_data: dict[str, Any] | None):
        try:
            selection = _select(ctx, live_data)
        except Exception:
            logger.exception("Invalid live options in map callback: %r", live_data)
            return _error_figure("Internal error: invalid filter options."), ""

        try:
            view = ctx.map_view
            data = view.compute_data(selection.hits)
            fig = view.render_figure(data, selection.front_lines)
        except Exception:
            logger.exception(
                "Error in update_map_from_options",
                extra={"live_options": live_data},
            )
            return _error_figure(
                "The app hit an unexpected error. "
                "If this keeps happening, grab the logs and open an issue."
            ), ""

        return fig, _status_text(selection, len(ctx.hits), len(ctx.front_lines))

    # ---------------------------------------------------------
    # CSV download of the hits currently on the map
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_DATA, "data"),
        Input(IDs.Control.DOWNLOAD_DATA_BTN, "n_clicks"),
        State(IDs.Store.LIVE_OPTIONS, "data"),
        prevent_initial_call=True,
    )
    def download_hits(_n_clicks, live_data):
        selection = _select(ctx, live_data)
        df = ctx.map_view.compute_data(selection.hits)
        return dcc.send_data_frame(df.to_csv, "hits.csv", index=False)
