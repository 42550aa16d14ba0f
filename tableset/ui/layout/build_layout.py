from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import html

from tableset.ui.ids import IDs
from tableset.ui.layout.build_filter_bar import build_filter_bar
from tableset.ui.layout.build_tables import build_columns

if TYPE_CHECKING:
    from tableset.ui.config import AppConfig


def status_text(table_set) -> str:
    return f"{len(table_set.filtered_cube)} of {len(table_set.data_cube)} rows match the current filters"


def build_layout(ctx: "AppConfig") -> dbc.Container:
    ctx.validate()
    table_set = ctx.table_set

    return dbc.Container(
        fluid=True,
        className="tableset",
        children=[
            html.H3(ctx.dashboard_config.ui_title, id=IDs.Control.TITLE, className="mt-3"),
            build_filter_bar(table_set.breadcrumbs.breadcrumbs),
            html.Div(build_columns(table_set), id=IDs.Control.COLUMNS, className="columns"),
            html.Small(status_text(table_set), id=IDs.Control.STATUS_BAR, className="text-muted"),
        ],
    )
