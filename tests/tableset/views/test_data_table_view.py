from tableset.core.events import CELL_CLICK, SORT_CHANGE, ClickAction
from tableset.core.formatters import thousands
from tableset.views.data_table_view import DataTableView


def _rows():
    return [
        {"country": "CHN", "impressions": 1500, "clicks": 5},
        {"country": "IND", "impressions": 200, "clicks": None},
        {"country": "USA", "impressions": 30000, "clicks": 3},
    ]


def _make_view(**kwargs) -> DataTableView:
    return DataTableView(
        "country",
        formatters={"impressions": thousands},
        clickable_columns=["country"],
        **kwargs,
    )


def test_render_rows_applies_sort_and_selection():
    view = _make_view(sort={"impressions": "desc"})

    view.render_rows(_rows(), lambda row: row["country"] != "IND")

    assert [r["country"] for r in view.rows] == ["USA", "CHN", "IND"]
    assert view.selected == [True, True, False]
    assert view.is_deselected(2)


def test_none_values_sort_last_in_both_directions():
    view = _make_view(sort={"clicks": "asc"})
    view.render_rows(_rows())
    assert [r["country"] for r in view.rows] == ["USA", "CHN", "IND"]

    view.set_sort_options({"clicks": "desc"})
    assert [r["country"] for r in view.rows] == ["CHN", "USA", "IND"]


def test_without_predicate_nothing_is_deselected():
    view = _make_view()
    view.render_rows(_rows())

    assert view.selected == [None, None, None]
    assert not any(view.is_deselected(i) for i in range(3))


def test_formatted_rows_and_headers():
    view = _make_view(columns=["country", "impressions"], column_names={"country": "Country code"})
    view.render_rows(_rows())

    assert view.header_names == ["Country code", "Impressions"]
    assert view.formatted_rows()[2] == {"country": "USA", "impressions": "30,000"}


def test_visible_columns_default_to_row_keys():
    view = _make_view()
    assert view.visible_columns == []

    view.render_rows(_rows())
    assert view.visible_columns == ["country", "impressions", "clicks"]


def test_numeric_columns_and_widths():
    view = _make_view()
    view.render_rows(_rows())

    assert view.numeric_columns() == ["impressions", "clicks"]
    # "Impressions" header (11) is wider than "30,000"
    assert view.numeric_column_widths() == {"impressions": 11, "clicks": 6}


def test_click_cell_emits_for_clickable_columns_only():
    view = _make_view()
    view.render_rows(_rows())
    events = []
    view.add_listener(CELL_CLICK, events.append)

    view.click_cell(1, "impressions", ClickAction.SELECT)
    view.click_cell(7, "country", ClickAction.SELECT)
    view.click_cell(1, "country", ClickAction.TOGGLE)

    assert len(events) == 1
    assert events[0].dimension == "country"
    assert events[0].value == "IND"
    assert events[0].action is ClickAction.TOGGLE


def test_change_sort_starts_descending_for_numbers_then_flips():
    view = _make_view()
    view.render_rows(_rows())
    sorts = []
    view.add_listener(SORT_CHANGE, lambda e: sorts.append(e.sort))

    view.change_sort("impressions")
    view.set_sort_options(sorts[-1])
    view.change_sort("impressions")
    view.change_sort("country")

    assert sorts == [{"impressions": "desc"}, {"impressions": "asc"}, {"country": "asc"}]


def test_missing_dimension_values_sort_last():
    # Blank values come back from pandas groupby / read_csv as NaN
    view = DataTableView("page", sort={"page": "asc"}, clickable_columns=["page"])
    view.render_rows(
        [
            {"page": "signup.html", "impressions": 1},
            {"page": float("nan"), "impressions": 2},
            {"page": "about.html", "impressions": 3},
            {"page": None, "impressions": 4},
        ]
    )

    assert [r["impressions"] for r in view.rows] == [3, 1, 2, 4]
    assert view.formatted_rows()[2]["page"] == ""

    view.set_sort_options({"page": "desc"})
    assert [r["impressions"] for r in view.rows] == [1, 3, 2, 4]
