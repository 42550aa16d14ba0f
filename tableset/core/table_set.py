from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .base_view import BaseView
from .breadcrumbs import FilterBreadcrumbs
from .click_filter import next_filters
from .data_cube import DataCube
from .events import (
    CELL_CLICK,
    GRAPH_BUTTON_CLICK,
    SORT_CHANGE,
    ClickEvent,
    EventSource,
    SortChangeEvent,
)
from .exceptions import InvalidConfiguration
from .filter_state import Filters, FilterState
from .options import ChartSpec, TableSetOptions
from .query_policy import TOTALS, query_for_view

logger = logging.getLogger(__name__)

ViewFactory = Callable[..., BaseView]


def _default_view_factory(**kwargs: Any) -> BaseView:
    from tableset.views.data_table_view import DataTableView

    return DataTableView(**kwargs)


class TableSet(EventSource):
    """
    A set of linked views over one DataCube, one view per configured dimension.

    Owns the FilterState and the shared sort. Clicks in a view go through the
    click-to-filter rules into the FilterState; every filter change re-derives
    every view. Sort changes skip the FilterState and are pushed to all views.

    Design Notes:
    - Each redraw is a full re-derivation, views are redrawn in declared order
    - A view is queried without the filter on its own dimension, see query_policy
    - graph_button_click events from views are re-dispatched from the TableSet unchanged
    """

    def __init__(
        self,
        data_cube: Optional[DataCube],
        options: Union[TableSetOptions, Mapping[str, Any], None],
        view_factory: Optional[ViewFactory] = None,
    ) -> None:
        super().__init__()
        if data_cube is None:
            raise InvalidConfiguration("`data_cube` cannot be null.")
        self.options = TableSetOptions.coerce(options)

        self.data_cube = data_cube
        # The cube filtered by every active filter, as of the last redraw.
        self.filtered_cube = data_cube
        self.render_fn = self.options.render_fn
        self.sort: Dict[str, str] = dict(self.options.sort)
        self.attached = False

        self.filter_state = FilterState()
        self.filter_state.subscribe(self.on_filter_changed)

        self.breadcrumbs = FilterBreadcrumbs(
            self.filter_state,
            formatters=self.options.formatters,
            column_names=self.options.column_names,
        )

        factory = view_factory or _default_view_factory
        self.charts: List[ChartSpec] = list(self.options.charts)
        self.views: List[BaseView] = [self._create_view(factory, chart) for chart in self.charts]

        logger.info(
            "TableSet created",
            extra={
                "charts": [c.dimension for c in self.charts],
                "n_rows": len(data_cube),
            },
        )

        self.redraw()

    def _create_view(self, factory: ViewFactory, chart: ChartSpec) -> BaseView:
        dimen = chart.dimension
        view_options: Dict[str, Any] = {
            "formatters": self.options.formatters,
            "column_names": self.options.column_names,
            "sort": self.sort,
            "clickable_columns": [] if dimen == TOTALS else [dimen],
        }
        chart_options = dict(chart.chart_options)
        if self.options.columns is not None:
            chart_options["columns"] = [dimen] + list(self.options.columns)
        view_options.update(chart_options)

        view = factory(dimension=dimen, **view_options)

        if dimen != TOTALS:
            view.add_listener(CELL_CLICK, self.on_click)
        view.add_listener(GRAPH_BUTTON_CLICK, lambda event: self.dispatch(GRAPH_BUTTON_CLICK, event))
        view.add_listener(SORT_CHANGE, self.on_sort_change)
        return view

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------
    def get_filters(self) -> Filters:
        return self.filter_state.get_filters()

    def set_filters(self, filters: Mapping[str, Sequence[Any]]) -> None:
        # Validated before any state changes
        unknown = [d for d in filters if d not in self.data_cube.dimensions]
        if unknown:
            raise InvalidConfiguration(
                f"Cannot filter on unknown dimensions {unknown}; cube has {self.data_cube.dimensions}"
            )
        self.filter_state.set_filters(filters)

    def remove_filter(self, dimension: str) -> None:
        self.filter_state.remove_filter(dimension)

    def clear_filters(self) -> None:
        self.filter_state.clear_filters()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def on_click(self, event: ClickEvent) -> None:
        # Stale events may name a dimension the cube no longer has
        if event.dimension not in self.data_cube.dimensions:
            logger.debug(
                "Ignoring click on unknown dimension",
                extra={"dimension": event.dimension},
            )
            return

        filters = next_filters(
            self.filter_state.get_filters(),
            event,
            self.data_cube.dimension_values,
        )
        self.filter_state.set_filters(filters)

    def on_sort_change(self, event: SortChangeEvent) -> None:
        self.sort = dict(event.sort)
        for view in self.views:
            view.set_sort_options(self.sort)
        self.redraw()

    def on_filter_changed(self) -> None:
        self.redraw()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def redraw(self) -> None:
        filters = self.filter_state.get_filters()
        # Recomputed every time so rows added to the cube since the last filter change show up
        self.filtered_cube = self.data_cube.where(filters)

        for view in self.views:
            query = query_for_view(self.data_cube, filters, view.dimension, self.filtered_cube)
            rows = query.rows
            if self.render_fn is not None:
                rows = self.render_fn(rows, query.source)
                if not isinstance(rows, list):
                    raise TypeError(
                        f"render_fn must return a list of rows, got {type(rows).__name__}"
                    )
            view.render_rows(rows, query.is_selected)

        if self.attached:
            self.sync_numeric_column_widths()

    def layout_columns(self) -> List[Tuple[int, List[BaseView]]]:
        """Views grouped by their layout column, columns in ascending order."""
        columns: Dict[int, List[BaseView]] = {}
        for chart, view in zip(self.charts, self.views):
            columns.setdefault(chart.layout.column, []).append(view)
        return sorted(columns.items())

    def relayout(self) -> None:
        """Call once the views are shown on a live layout surface."""
        self.attached = True
        self.sync_numeric_column_widths()

    def sync_numeric_column_widths(self) -> None:
        # Within each layout column, same-named numeric columns get the same
        # width so they line up across tables.
        for _, views in self.layout_columns():
            column_to_width: Dict[str, int] = {}
            for view in views:
                for column, width in view.numeric_column_widths().items():
                    column_to_width[column] = max(width, column_to_width.get(column, 0))
            for view in views:
                view.set_column_min_widths(column_to_width)

    def view_for(self, dimension: str) -> BaseView:
        for view in self.views:
            if view.dimension == dimension:
                return view
        raise KeyError(f"No view for dimension '{dimension}'")
