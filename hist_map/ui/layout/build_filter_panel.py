from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from hist_map.core.model import HIT_TYPES, AddressType, AppOptions, hit_type_text
from hist_map.core.staging import options_to_dict
from hist_map.ui.ids import IDs


def build_filter_panel(options: AppOptions) -> dbc.Offcanvas:
    """
    Filter drawer. Controls edit the staging options only; the map changes
    when "Применить" is pressed.
    """
    values = options_to_dict(options)
    hit = values["hit"]
    front_line = values["front_line"]

    type_options = [
        {"label": f" {hit_type_text(t)}", "value": int(t)} for t in HIT_TYPES
    ]

    return dbc.Offcanvas(
        id=IDs.Control.DRAWER,
        title="Настройки поиска",
        placement="start",
        is_open=False,
        scrollable=True,
        backdrop=True,
        children=[
            html.H6("Попадания", className="text-muted"),
            html.Label("Улица", className="form-label"),
            dbc.Input(
                id=IDs.Control.STREET_INPUT,
                type="text",
                value=hit["street"],
                placeholder="Любая улица",
                debounce=True,
                className="mb-3",
            ),
            html.Label("Номер дома", className="form-label"),
            dbc.Input(
                id=IDs.Control.HOUSE_NUMBER_INPUT,
                type="number",
                min=1,
                step=1,
                value=hit["house_number"],
                placeholder="Любой",
                debounce=True,
                className="mb-3",
            ),
            html.Label("Адреса", className="form-label"),
            dbc.RadioItems(
                id=IDs.Control.ADDR_TYPE_SELECT,
                options=[
                    {"label": " Современные", "value": AddressType.MODERN.value},
                    {"label": " Исторические", "value": AddressType.HISTORIC.value},
                ],
                value=hit["addr_type"],
                inline=True,
                className="mb-3",
            ),
            html.Label("Период", className="form-label d-block"),
            dcc.DatePickerRange(
                id=IDs.Control.HIT_DATE_RANGE,
                start_date=hit["min_date"],
                end_date=hit["max_date"],
                display_format="DD.MM.YYYY",
                clearable=True,
                className="mb-3",
            ),
            html.Label("Типы снарядов", className="form-label d-block"),
            dbc.Checklist(
                id=IDs.Control.HIT_TYPES_CHECKLIST,
                options=type_options,
                value=hit["types"],
                className="mb-3",
            ),
            html.Hr(),
            html.H6("Линия фронта", className="text-muted"),
            dbc.Switch(
                id=IDs.Control.FRONT_LINE_SHOW,
                label="Показывать линию фронта",
                value=front_line["show"],
                className="mb-2",
            ),
            html.Label("На дату", className="form-label d-block"),
            dcc.DatePickerSingle(
                id=IDs.Control.FRONT_LINE_DATE,
                date=front_line["date"],
                display_format="DD.MM.YYYY",
                clearable=True,
                className="mb-3",
            ),
            html.Hr(),
            html.Div(
                [
                    dbc.Button("Применить", id=IDs.Control.APPLY_BTN, color="primary", className="me-2"),
                    dbc.Button("Сбросить", id=IDs.Control.RESET_BTN, color="secondary", outline=True),
                ],
                className="d-flex",
            ),
            html.Small(id=IDs.Control.DIRTY_BADGE, className="text-warning d-block mt-2"),
        ],
    )
