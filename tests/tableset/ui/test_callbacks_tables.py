from pathlib import Path

from dash import Dash

from tableset.core.data_cube import DataCube
from tableset.core.table_set import TableSet
from tableset.ui.callbacks.callbacks_tables import (
    handle_cell_click,
    handle_clear_filters,
    handle_filter_remove,
    handle_sort,
    table_outputs,
)
from tableset.ui.dash_app import create_dash_app
from tableset.ui.layout.build_tables import TABLE_PROPS, table_props

CONFIG_ROOT = Path(__file__).parents[3] / "config"


def _make_table_set() -> TableSet:
    cube = DataCube(
        ["page", "country"],
        ["impressions"],
        [
            {"page": "index.html", "country": "CHN", "impressions": 10},
            {"page": "index.html", "country": "IND", "impressions": 20},
            {"page": "about.html", "country": "USA", "impressions": 40},
        ],
    )
    return TableSet(cube, {"charts": ["totals", "page", "country"]})


def test_handle_cell_click_toggle_deselects_value():
    ts = _make_table_set()

    # country view, row 1 is IND
    handle_cell_click(ts, 2, {"row": 1, "column": 0, "column_id": "country"}, "toggle")

    assert ts.get_filters() == {"country": ["CHN", "USA"]}
    props = table_props(ts.views[2])
    assert props["style_data_conditional"][0]["if"] == {"row_index": 1}


def test_handle_cell_click_defaults_to_select():
    ts = _make_table_set()

    handle_cell_click(ts, 1, {"row": 0, "column": 0, "column_id": "page"}, None)

    assert ts.get_filters() == {"page": ["index.html"]}


def test_handle_cell_click_on_metric_column_is_ignored():
    ts = _make_table_set()

    handle_cell_click(ts, 2, {"row": 0, "column": 1, "column_id": "impressions"}, "select")
    handle_cell_click(ts, 2, None, "select")

    assert ts.get_filters() == {}


def test_handle_sort_applies_to_every_view():
    ts = _make_table_set()

    handle_sort(ts, 2, [{"column_id": "impressions", "direction": "desc"}])

    assert ts.sort == {"impressions": "desc"}
    assert [r["page"] for r in ts.views[1].rows] == ["about.html", "index.html"]
    assert table_props(ts.views[1])["sort_by"] == [{"column_id": "impressions", "direction": "desc"}]


def test_handle_filter_remove_ignores_fresh_buttons():
    ts = _make_table_set()
    ts.set_filters({"country": ["CHN"], "page": ["index.html"]})

    handle_filter_remove(ts, "country", None)
    assert set(ts.get_filters()) == {"country", "page"}

    handle_filter_remove(ts, "country", 1)
    assert ts.get_filters() == {"page": ["index.html"]}


def test_handle_clear_filters():
    ts = _make_table_set()
    ts.set_filters({"country": ["CHN"], "page": ["index.html"]})

    handle_clear_filters(ts, None)
    assert len(ts.get_filters()) == 2

    handle_clear_filters(ts, 1)
    assert ts.get_filters() == {}
    assert table_outputs(ts)[-1] == "3 of 3 rows match the current filters"


def test_table_outputs_shape():
    ts = _make_table_set()
    ts.set_filters({"country": ["CHN"]})

    outputs = table_outputs(ts)

    assert len(outputs) == len(TABLE_PROPS) + 3
    assert all(len(per_view) == 3 for per_view in outputs[: len(TABLE_PROPS)])
    assert outputs[len(TABLE_PROPS)] == [None, None, None]
    assert len(outputs[-2]) == 1
    assert outputs[-1] == "1 of 3 rows match the current filters"


def test_create_dash_app_from_bundled_config():
    app = create_dash_app(CONFIG_ROOT)

    assert isinstance(app, Dash)
    assert app.title == "Traffic Explorer"
    assert app.layout is not None
