from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd
import plotly.graph_objects as go

from hist_map.core.model import (
    HIT_TYPES,
    ArtilleryHit,
    FrontLineGeoJSON,
    HitType,
    Position,
    format_display_date,
    hit_type_text,
)

HIT_COLUMNS = [
    "lat",
    "lng",
    "type",
    "type_label",
    "date",
    "street",
    "house_number",
    "description",
]

HIT_COLORS: Dict[HitType, str] = {
    HitType.Incendiary: "#f59e0b",
    HitType.Fougasse: "#ef4444",
    HitType.Artillery: "#8b5cf6",
}

DEFAULT_FRONT_LINE_COLOR = "#dc2626"


class MapView:
    """
    Hits + front lines -> Plotly map figure.

    - compute_data: one DataFrame row per (already filtered) hit
    - render_figure: one marker trace per hit type, in HIT_TYPES order, and
      one GeoJSON line layer per front-line collection
    """

    def __init__(self, map_style: str, center: Position, zoom: float):
        self.map_style = map_style
        self.center = center
        self.zoom = zoom

    def compute_data(self, hits: Sequence[ArtilleryHit]) -> pd.DataFrame:
        if not hits:
            return pd.DataFrame(columns=HIT_COLUMNS)

        return pd.DataFrame(
            [
                {
                    "lat": hit.position.lat,
                    "lng": hit.position.lng,
                    "type": int(hit.type),
                    "type_label": hit_type_text(hit.type),
                    "date": format_display_date(hit.date),
                    "street": hit.address.street,
                    "house_number": hit.address.house_number,
                    "description": hit.description or "",
                }
                for hit in hits
            ],
            columns=HIT_COLUMNS,
        )

    def render_figure(
        self,
        data: pd.DataFrame,
        front_lines: Sequence[FrontLineGeoJSON],
    ) -> go.Figure:
        fig = go.Figure()

        for hit_type in HIT_TYPES:
            rows = data[data["type"] == int(hit_type)]
            if rows.empty:
                continue
            hover = (
                rows["type_label"] + "<br>" + rows["date"] + "<br>"
                + rows["street"] + ", " + rows["house_number"].astype(str)
                + "<br>" + rows["description"]
            )
            fig.add_trace(
                go.Scattermap(
                    lat=rows["lat"],
                    lon=rows["lng"],
                    mode="markers",
                    marker=dict(size=9, color=HIT_COLORS[hit_type]),
                    name=hit_type_text(hit_type),
                    text=hover,
                    hoverinfo="text",
                )
            )

        fig.update_layout(
            map=dict(
                style=self.map_style,
                center=dict(lat=self.center.lat, lon=self.center.lng),
                zoom=self.zoom,
                layers=self.front_line_layers(front_lines),
            ),
            margin=dict(l=0, r=0, t=0, b=0),
            legend=dict(yanchor="top", y=0.98, xanchor="right", x=0.98),
            uirevision="hist-map",
        )
        if data.empty:
            fig.add_annotation(
                text="Нет попаданий для выбранных фильтров",
                showarrow=False,
                xref="paper",
                yref="paper",
                x=0.5,
                y=0.02,
            )
        return fig

    @staticmethod
    def front_line_layers(front_lines: Sequence[FrontLineGeoJSON]) -> List[dict]:
        layers = []
        for fl in front_lines:
            color = DEFAULT_FRONT_LINE_COLOR
            if fl.features:
                color = fl.features[0].properties.style.get("color", color)
            layers.append(
                dict(
                    sourcetype="geojson",
                    source=fl.to_geojson(),
                    type="line",
                    color=color,
                    line=dict(width=3),
                )
            )
        return layers
