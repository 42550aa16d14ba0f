from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import dash
from dash import ALL, Input, Output, State
from dash.exceptions import PreventUpdate

from tableset.core.events import ClickAction
from tableset.core.table_set import TableSet
from tableset.ui.ids import IDs
from tableset.ui.layout.build_filter_bar import build_filter_chips
from tableset.ui.layout.build_layout import status_text
from tableset.ui.layout.build_tables import TABLE_PROPS, table_props

if TYPE_CHECKING:
    from tableset.ui.config import AppConfig

logger = logging.getLogger(__name__)

TABLE = {"type": IDs.Pattern.TABLE, "index": ALL}
FILTER_REMOVE = {"type": IDs.Pattern.FILTER_REMOVE, "index": ALL}


# -----------------------------------------------------------------------------
# Helpers: translate DataTable props into TableSet events
# -----------------------------------------------------------------------------
def handle_cell_click(
    table_set: TableSet,
    index: int,
    active_cell: Optional[Dict[str, Any]],
    action: Optional[str],
) -> None:
    if not active_cell:
        return
    view = table_set.views[index]
    view.click_cell(
        int(active_cell["row"]),
        active_cell["column_id"],
        ClickAction(action or ClickAction.SELECT.value),
    )


def handle_sort(table_set: TableSet, index: int, sort_by: Optional[List[Dict[str, str]]]) -> None:
    sort = {s["column_id"]: s["direction"] for s in (sort_by or [])}
    table_set.views[index].apply_sort(sort)


def handle_filter_remove(table_set: TableSet, dimension: str, n_clicks: Optional[int]) -> None:
    # New remove buttons fire with n_clicks=None when the filter bar is re-rendered
    if not n_clicks:
        return
    table_set.breadcrumbs.remove(dimension)


def handle_clear_filters(table_set: TableSet, n_clicks: Optional[int]) -> None:
    if not n_clicks:
        return
    table_set.clear_filters()


def table_outputs(table_set: TableSet) -> tuple:
    """
    One list per DataTable prop (in TABLE_PROPS order), then active_cell,
    the filter bar children and the status text.
    """
    props = [table_props(view) for view in table_set.views]
    per_prop = tuple([p[name] for p in props] for name in TABLE_PROPS)
    active_cells = [None] * len(table_set.views)
    return per_prop + (
        active_cells,
        build_filter_chips(table_set.breadcrumbs.breadcrumbs),
        status_text(table_set),
    )


def register_table_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Cell click / sort / filter removal / clear all -> every table
    # ---------------------------------------------------------
    @app.callback(
        *[Output(TABLE, prop) for prop in TABLE_PROPS],
        Output(TABLE, "active_cell"),
        Output(IDs.Control.FILTER_BAR, "children"),
        Output(IDs.Control.STATUS_BAR, "children"),
        Input(TABLE, "active_cell"),
        Input(TABLE, "sort_by"),
        Input(FILTER_REMOVE, "n_clicks"),
        Input(IDs.Control.CLEAR_FILTERS, "n_clicks"),
        State(IDs.Control.CLICK_ACTION, "value"),
        prevent_initial_call=True,
    )
    def on_table_interaction(active_cells, sort_bys, remove_clicks, clear_clicks, action):
        table_set = ctx.table_set
        trigger = dash.ctx.triggered_id
        if trigger is None or table_set is None:
            raise PreventUpdate

        prop = dash.ctx.triggered[0]["prop_id"].rsplit(".", 1)[-1]
        value = dash.ctx.triggered[0]["value"]

        try:
            if trigger == IDs.Control.CLEAR_FILTERS:
                handle_clear_filters(table_set, value)
            elif trigger["type"] == IDs.Pattern.TABLE and prop == "active_cell":
                if not value:
                    raise PreventUpdate
                handle_cell_click(table_set, trigger["index"], value, action)
            elif trigger["type"] == IDs.Pattern.TABLE and prop == "sort_by":
                handle_sort(table_set, trigger["index"], value)
            elif trigger["type"] == IDs.Pattern.FILTER_REMOVE:
                if not value:
                    raise PreventUpdate
                handle_filter_remove(table_set, trigger["index"], value)
            else:
                raise PreventUpdate
        except PreventUpdate:
            raise
        except Exception:
            logger.exception(
                "Error handling table interaction",
                extra={"trigger": str(trigger), "prop": prop},
            )
            raise PreventUpdate

        logger.info(
            "table_interaction",
            extra={"trigger": str(trigger), "prop": prop, "filters": list(table_set.get_filters())},
        )
        return table_outputs(table_set)
