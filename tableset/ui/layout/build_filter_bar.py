from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import html

from tableset.core.breadcrumbs import Breadcrumb
from tableset.ui.ids import IDs, filter_remove_id


def build_filter_chips(breadcrumbs: List[Breadcrumb]) -> list:
    if not breadcrumbs:
        return [html.Span("No filters", className="text-muted")]

    return [
        html.Span(
            [
                dbc.Button(
                    "x",
                    id=filter_remove_id(crumb.dimension),
                    color="link",
                    size="sm",
                    className="remove p-0 me-1",
                ),
                html.Span(crumb.caption, title=crumb.title, className="caption"),
            ],
            className="filter badge rounded-pill text-bg-light border me-2",
            **{"data-dimension": crumb.dimension},
        )
        for crumb in breadcrumbs
    ]


def build_filter_bar(breadcrumbs: List[Breadcrumb]) -> dbc.Row:
    return dbc.Row(
        [
            dbc.Col(
                html.Div(
                    build_filter_chips(breadcrumbs),
                    id=IDs.Control.FILTER_BAR,
                    className="filters-container d-flex flex-wrap align-items-center",
                ),
                md=8,
            ),
            dbc.Col(
                dbc.Button(
                    "Clear all",
                    id=IDs.Control.CLEAR_FILTERS,
                    color="secondary",
                    outline=True,
                    size="sm",
                ),
                md=1,
            ),
            dbc.Col(
                dbc.RadioItems(
                    id=IDs.Control.CLICK_ACTION,
                    options=[
                        {"label": "Select", "value": "select"},
                        {"label": "Toggle", "value": "toggle"},
                    ],
                    value="select",
                    inline=True,
                ),
                md=3,
                className="d-flex justify-content-end",
            ),
        ],
        className="filter-settings my-2 align-items-center",
    )
