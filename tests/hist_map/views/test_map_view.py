from datetime import date

import pandas as pd
import plotly.graph_objects as go

from hist_map.core.model import (
    Address,
    ArtilleryHit,
    FrontLineElement,
    FrontLineGeoJSON,
    FrontLineProps,
    HitType,
    Position,
    hit_type_text,
)
from hist_map.views.map_view import HIT_COLUMNS, MapView


def _make_view() -> MapView:
    return MapView(map_style="carto-darkmatter", center=Position(lat=59.94, lng=30.31), zoom=11)


def _make_hits():
    return [
        ArtilleryHit(
            type=HitType.Artillery,
            date=date(1942, 4, 4),
            address=Address(street="Mira", house_number=5),
            position=Position(lat=59.96, lng=30.31),
            description="corner hit",
        ),
        ArtilleryHit(
            type=HitType.Incendiary,
            date=date(1941, 9, 8),
            address=Address(street="Kievskaya", house_number=5),
            position=Position(lat=59.90, lng=30.32),
        ),
    ]


def _make_front_line() -> FrontLineGeoJSON:
    return FrontLineGeoJSON(
        features=(
            FrontLineElement(
                properties=FrontLineProps("d", "h", "1941-09-08", "1943-01-18", style={"color": "#123456"}),
                geometry={"type": "LineString", "coordinates": [[30.0, 59.8], [30.5, 59.8]]},
            ),
        ),
        name="1941",
    )


def test_compute_data_one_row_per_hit():
    data = _make_view().compute_data(_make_hits())

    assert isinstance(data, pd.DataFrame)
    assert list(data.columns) == HIT_COLUMNS
    assert len(data) == 2
    assert list(data["type"]) == [int(HitType.Artillery), int(HitType.Incendiary)]
    # Display format, not storage format
    assert list(data["date"]) == ["04.04.1942", "08.09.1941"]
    assert list(data["description"]) == ["corner hit", ""]
    assert data.loc[0, "type_label"] == hit_type_text(HitType.Artillery)


def test_compute_data_empty():
    data = _make_view().compute_data([])
    assert data.empty
    assert list(data.columns) == HIT_COLUMNS


def test_render_figure_traces_follow_canonical_type_order():
    view = _make_view()
    fig = view.render_figure(view.compute_data(_make_hits()), [])

    assert isinstance(fig, go.Figure)
    # Incendiary comes before Artillery in HIT_TYPES; Fougasse has no rows
    assert [t.name for t in fig.data] == [
        hit_type_text(HitType.Incendiary),
        hit_type_text(HitType.Artillery),
    ]
    assert fig.layout.map.style == "carto-darkmatter"


def test_render_figure_adds_front_line_layers():
    view = _make_view()
    fig = view.render_figure(view.compute_data([]), [_make_front_line()])

    layers = fig.layout.map.layers
    assert len(layers) == 1
    assert layers[0].type == "line"
    assert layers[0].color == "#123456"
    assert layers[0].source["features"][0]["properties"]["dateStart"] == "1941-09-08"
    # Empty hit selection is reported on the map
    assert len(fig.layout.annotations) == 1
