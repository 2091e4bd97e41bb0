from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import dash
from dash import Input, Output, State

from hist_map.core.exceptions import HistMapError
from hist_map.core.model import AppOptions
from hist_map.core.staging import StagedOptions, options_to_dict
from hist_map.ui.ids import IDs

if TYPE_CHECKING:
    from hist_map.ui.config import AppConfig

logger = logging.getLogger(__name__)

# Order of the drawer controls, shared by the callback signature and helpers
CONTROL_KEYS = (
    "street",
    "house_number",
    "addr_type",
    "min_date",
    "max_date",
    "types",
    "show",
    "date",
)

ControlValues = Tuple[Any, ...]


def _patch_from_controls(controls: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Pure helper: turn raw drawer control values into an options patch.
    """
    return {
        "hit": {
            "street": (controls.get("street") or "").strip(),
            "house_number": controls.get("house_number"),
            "addr_type": controls.get("addr_type") or "modern",
            "min_date": controls.get("min_date"),
            "max_date": controls.get("max_date"),
            "types": list(controls.get("types") or []),
        },
        "front_line": {
            "show": bool(controls.get("show")),
            "date": controls.get("date"),
        },
    }


def _controls_from_options(options: AppOptions) -> ControlValues:
    values = options_to_dict(options)
    hit, front_line = values["hit"], values["front_line"]
    return (
        hit["street"],
        hit["house_number"],
        hit["addr_type"],
        hit["min_date"],
        hit["max_date"],
        hit["types"],
        front_line["show"],
        front_line["date"],
    )


def _staging_transition(
        triggered_id: Optional[str],
        controls: Dict[str, Any],
        staging_data: Optional[dict],
        live_data: Optional[dict],
) -> Tuple[dict, ControlValues]:
    """
    Pure helper deciding the next staging value for a drawer event.

    - drawer opened/closed -> discard edits, staging follows live again
    - reset button         -> defaults into staging (still needs apply)
    - any control edit     -> merge the control values into staging
    - initial call         -> unchanged
    Returns the serialised staging options and the values to show in the controls.
    """
    store = StagedOptions.from_dicts(live_data, staging_data)

    if triggered_id == IDs.Control.DRAWER:
        store.discard()
    elif triggered_id == IDs.Control.RESET_BTN:
        store.reset_staging()
    elif triggered_id is not None:
        try:
            store.mutate_staging(_patch_from_controls(controls))
        except HistMapError as e:
            logger.warning("Ignoring invalid filter edit: %s", e, extra={"controls": controls})

    return options_to_dict(store.staging), _controls_from_options(store.staging)


def _apply_transition(staging_data: Optional[dict], live_data: Optional[dict]) -> dict:
    store = StagedOptions.from_dicts(live_data, staging_data)
    return options_to_dict(store.apply())


def _dirty_text(staging_data: Optional[dict], live_data: Optional[dict]) -> str:
    store = StagedOptions.from_dicts(live_data, staging_data)
    return "Есть неприменённые изменения" if store.is_dirty else ""


def register_filter_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    control_props = [
        (IDs.Control.STREET_INPUT, "value"),
        (IDs.Control.HOUSE_NUMBER_INPUT, "value"),
        (IDs.Control.ADDR_TYPE_SELECT, "value"),
        (IDs.Control.HIT_DATE_RANGE, "start_date"),
        (IDs.Control.HIT_DATE_RANGE, "end_date"),
        (IDs.Control.HIT_TYPES_CHECKLIST, "value"),
        (IDs.Control.FRONT_LINE_SHOW, "value"),
        (IDs.Control.FRONT_LINE_DATE, "date"),
    ]

    # ---------------------------------------------------------
    # Drawer open button
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DRAWER, "is_open"),
        Input(IDs.Control.DRAWER_OPEN_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def open_drawer(_n_clicks):
        return True

    # ---------------------------------------------------------
    # Controls <-> staging options (one callback, so the controls can be
    # re-synced from staging without a circular dependency)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.STAGING_OPTIONS, "data"),
        *[Output(cid, prop) for cid, prop in control_props],
        *[Input(cid, prop) for cid, prop in control_props],
        Input(IDs.Control.RESET_BTN, "n_clicks"),
        Input(IDs.Control.DRAWER, "is_open"),
        State(IDs.Store.STAGING_OPTIONS, "data"),
        State(IDs.Store.LIVE_OPTIONS, "data"),
        prevent_initial_call=True,
    )
    def sync_staging(*args):
        n_controls = len(control_props)
        controls = dict(zip(CONTROL_KEYS, args[:n_controls]))
        staging_data, live_data = args[-2], args[-1]

        staging, control_values = _staging_transition(
            dash.ctx.triggered_id, controls, staging_data, live_data
        )
        return (staging, *control_values)

    # ---------------------------------------------------------
    # Apply: staging -> live
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.LIVE_OPTIONS, "data"),
        Input(IDs.Control.APPLY_BTN, "n_clicks"),
        State(IDs.Store.STAGING_OPTIONS, "data"),
        State(IDs.Store.LIVE_OPTIONS, "data"),
        prevent_initial_call=True,
    )
    def apply_staging(_n_clicks, staging_data, live_data):
        return _apply_transition(staging_data, live_data)

    @app.callback(
        Output(IDs.Control.DIRTY_BADGE, "children"),
        Input(IDs.Store.STAGING_OPTIONS, "data"),
        Input(IDs.Store.LIVE_OPTIONS, "data"),
    )
    def update_dirty_badge(staging_data, live_data):
        return _dirty_text(staging_data, live_data)
