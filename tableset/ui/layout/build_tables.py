from __future__ import annotations

from typing import Any, Dict, List

import dash_bootstrap_components as dbc
from dash import dash_table, html

from tableset.core.formatters import format_column_name
from tableset.core.table_set import TableSet
from tableset.ui.ids import table_id
from tableset.views.data_table_view import DESELECTED_FILL, DESELECTED_FONT, DataTableView

# DataTable props recomputed on every filter or sort change
TABLE_PROPS = ("data", "style_data_conditional", "style_cell_conditional", "sort_by")


def table_props(view: DataTableView) -> Dict[str, Any]:
    """Current DataTable props for one view."""
    visible = view.visible_columns

    style_data_conditional: List[dict] = [
        {
            "if": {"row_index": i},
            "backgroundColor": DESELECTED_FILL,
            "color": DESELECTED_FONT,
        }
        for i in range(len(view.rows))
        if view.is_deselected(i)
    ]

    style_cell_conditional: List[dict] = [
        {"if": {"column_id": column}, "textAlign": "right"}
        for column in view.numeric_columns()
    ]
    style_cell_conditional += [
        {"if": {"column_id": column}, "minWidth": f"{width + 2}ch"}
        for column, width in view.column_min_widths.items()
    ]

    return {
        "data": view.formatted_rows(),
        "style_data_conditional": style_data_conditional,
        "style_cell_conditional": style_cell_conditional,
        "sort_by": [
            {"column_id": column, "direction": order}
            for column, order in view.sort.items()
            if column in visible
        ],
    }


def table_columns(view: DataTableView) -> List[dict]:
    return [
        {"name": name, "id": column}
        for column, name in zip(view.visible_columns, view.header_names)
    ]


def build_table_card(view: DataTableView, index: int) -> dbc.Card:
    title = view.title or format_column_name(view.dimension or "", view.column_names)
    return dbc.Card(
        [
            dbc.CardHeader(html.Strong(title), className="p-2"),
            dbc.CardBody(
                dash_table.DataTable(
                    id=table_id(index),
                    columns=table_columns(view),
                    sort_action="custom",
                    sort_mode="single",
                    page_action="none",
                    style_as_list_view=True,
                    style_header={"fontWeight": "bold"},
                    style_cell={"padding": "4px 8px", "fontFamily": "inherit"},
                    **table_props(view),
                ),
                className="p-0",
            ),
        ],
        className="tableset-card mb-3",
    )


def build_columns(table_set: TableSet) -> dbc.Row:
    index_of = {id(view): i for i, view in enumerate(table_set.views)}
    return dbc.Row(
        [
            dbc.Col(
                [build_table_card(view, index_of[id(view)]) for view in views],
                className=f"column column{column}",
            )
            for column, views in table_set.layout_columns()
        ],
        className="gx-3",
    )
