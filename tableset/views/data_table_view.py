from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from tableset.core.base_view import BaseView
from tableset.core.data_cube import Row
from tableset.core.events import (
    CELL_CLICK,
    GRAPH_BUTTON_CLICK,
    SORT_CHANGE,
    ClickAction,
    ClickEvent,
    GraphButtonClickEvent,
    SortChangeEvent,
)
from tableset.core.formatters import format_column_name

logger = logging.getLogger(__name__)

DESELECTED_FILL = "#eeeeee"
DESELECTED_FONT = "#aaaaaa"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_missing(value: Any) -> bool:
    # Blank dimension values come back from pandas as NaN, not None
    return value is None or (pd.api.types.is_scalar(value) and bool(pd.isna(value)))


def _sorted_rows(rows: List[Row], sort: Mapping[str, str]) -> List[Row]:
    # Stable sorts applied from the least significant key; missing values always sort last
    out = list(rows)
    for column, order in reversed(list(sort.items())):
        present = [r for r in out if not _is_missing(r.get(column))]
        missing = [r for r in out if _is_missing(r.get(column))]
        present.sort(key=lambda r: r[column], reverse=(order == "desc"))
        out = present + missing
    return out


class DataTableView(BaseView):
    """
    Table of rows for one dimension of a TableSet.

    Shows:
      - one row per dimension value, the dimension first, then metrics
      - rows rejected by the selection predicate greyed out

    Cells of the clickable columns emit 'cell_click' events; header clicks emit
    'sort_change'. The view never changes filters itself.
    """

    def __init__(
        self,
        dimension: str,
        formatters: Optional[Mapping[str, Callable[[Any], str]]] = None,
        column_names: Optional[Mapping[str, str]] = None,
        sort: Optional[Mapping[str, str]] = None,
        clickable_columns: Optional[Iterable[str]] = None,
        columns: Optional[Iterable[str]] = None,
        title: Optional[str] = None,
    ) -> None:
        super().__init__(dimension)
        self.formatters: Dict[str, Callable[[Any], str]] = dict(formatters or {})
        self.column_names: Dict[str, str] = dict(column_names or {})
        self.sort: Dict[str, str] = dict(sort or {})
        self.clickable_columns: List[str] = list(clickable_columns or [])
        self.columns: Optional[List[str]] = list(columns) if columns is not None else None
        self.title = title

        self.rows: List[Row] = []
        self.selected: List[Optional[bool]] = []
        self.column_min_widths: Dict[str, int] = {}
        self._is_selected: Optional[Callable[[Row], bool]] = None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render_rows(
        self,
        rows: List[Row],
        is_selected: Optional[Callable[[Row], bool]] = None,
    ) -> None:
        self._is_selected = is_selected
        self.rows = _sorted_rows(rows, self.sort)
        self.selected = [is_selected(r) if is_selected else None for r in self.rows]

    def set_sort_options(self, sort: Mapping[str, str]) -> None:
        self.sort = dict(sort)
        self.render_rows(self.rows, self._is_selected)

    @property
    def visible_columns(self) -> List[str]:
        if self.columns is not None:
            return list(self.columns)
        if self.rows:
            return list(self.rows[0].keys())
        return []

    @property
    def header_names(self) -> List[str]:
        return [format_column_name(c, self.column_names) for c in self.visible_columns]

    def format_value(self, column: str, value: Any) -> str:
        formatter = self.formatters.get(column)
        if formatter is not None:
            return formatter(value)
        return "" if _is_missing(value) else str(value)

    def formatted_rows(self) -> List[Dict[str, str]]:
        columns = self.visible_columns
        return [{c: self.format_value(c, row.get(c)) for c in columns} for row in self.rows]

    def is_deselected(self, index: int) -> bool:
        return self.selected[index] is False

    def numeric_columns(self) -> List[str]:
        columns = []
        for column in self.visible_columns:
            values = [r.get(column) for r in self.rows if not _is_missing(r.get(column))]
            if values and all(_is_number(v) for v in values):
                columns.append(column)
        return columns

    def numeric_column_widths(self) -> Dict[str, int]:
        """Width in characters of each numeric column: its header or widest cell."""
        formatted = self.formatted_rows()
        widths = {}
        for column in self.numeric_columns():
            cells = [len(row[column]) for row in formatted]
            widths[column] = max([len(format_column_name(column, self.column_names))] + cells)
        return widths

    def set_column_min_widths(self, widths: Dict[str, int]) -> None:
        self.column_min_widths = {c: w for c, w in widths.items() if c in self.visible_columns}

    # ------------------------------------------------------------------
    # User interaction
    # ------------------------------------------------------------------
    def click_cell(self, row_index: int, column: str, action: ClickAction = ClickAction.SELECT) -> None:
        if column not in self.clickable_columns:
            return
        if not 0 <= row_index < len(self.rows):
            logger.debug("Click on a row that is no longer rendered", extra={"row_index": row_index})
            return
        value = self.rows[row_index].get(column)
        self.dispatch(CELL_CLICK, ClickEvent(dimension=column, value=value, action=ClickAction(action)))

    def apply_sort(self, sort: Mapping[str, str]) -> None:
        self.dispatch(SORT_CHANGE, SortChangeEvent(sort=dict(sort)))

    def change_sort(self, column: str) -> None:
        """Header click: flip the column's order, numeric columns start descending."""
        current = self.sort.get(column)
        if current is None:
            order = "desc" if column in self.numeric_columns() else "asc"
        else:
            order = "asc" if current == "desc" else "desc"
        self.apply_sort({column: order})

    def click_graph_button(self, row_index: int, column: str) -> None:
        row = self.rows[row_index] if 0 <= row_index < len(self.rows) else {}
        self.dispatch(
            GRAPH_BUTTON_CLICK,
            GraphButtonClickEvent(detail={"dimension": self.dimension, "column": column, "row": dict(row)}),
        )
