from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .exceptions import InvalidConfiguration
from .formatters import Formatter, resolve_formatters

RenderFn = Callable[[List[Dict[str, Any]], Any], List[Dict[str, Any]]]

SORT_ORDERS = ("asc", "desc")


@dataclass(frozen=True)
class LayoutOptions:
    """Where a chart is placed: the index of the layout column it lives in."""
    column: int = 0


@dataclass(frozen=True)
class ChartSpec:
    """
    One declared chart (view) of a TableSet.

    Accepted raw shapes:
    - "country"
    - ["country", {"column": 1}, {"title": "Countries"}]  (layout and chart options optional)
    - {"dimension": "country", "layout": {...}, "chart_options": {...}}
    """
    dimension: str
    layout: LayoutOptions = field(default_factory=LayoutOptions)
    chart_options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Any) -> ChartSpec:
        if isinstance(raw, ChartSpec):
            return raw

        if isinstance(raw, str):
            return cls(dimension=raw)

        if isinstance(raw, Mapping):
            dimension = raw.get("dimension")
            layout_raw = raw.get("layout")
            chart_raw = raw.get("chart_options")
        elif isinstance(raw, Sequence) and len(raw) >= 1:
            dimension = raw[0]
            layout_raw = raw[1] if len(raw) > 1 else None
            chart_raw = raw[2] if len(raw) > 2 else None
        else:
            raise InvalidConfiguration(f"Invalid chart entry: {raw!r}")

        if not isinstance(dimension, str) or not dimension:
            raise InvalidConfiguration(f"Chart entry has no dimension: {raw!r}")

        layout_raw = layout_raw or {}
        try:
            layout = LayoutOptions(column=int(layout_raw.get("column") or 0))
        except (TypeError, ValueError, AttributeError):
            raise InvalidConfiguration(f"Invalid layout options for chart '{dimension}': {layout_raw!r}")

        return cls(dimension=dimension, layout=layout, chart_options=dict(chart_raw or {}))


@dataclass
class TableSetOptions:
    """
    Options for a TableSet.

    - charts: the views, in render order. "totals" is a special dimension which
      renders one row of totals for the whole (filtered) cube.
    - sort: {column: "asc" | "desc"}, shared by every view
    - column_names: {column: display name}
    - columns: the metrics shown in each view; the view's dimension is prepended
    - formatters: {column: callable or registered formatter name}
    - render_fn: optional (rows, cube) -> rows, e.g. to add derived metrics
    """
    charts: List[ChartSpec]
    formatters: Dict[str, Formatter] = field(default_factory=dict)
    column_names: Dict[str, str] = field(default_factory=dict)
    sort: Dict[str, str] = field(default_factory=dict)
    columns: Optional[List[str]] = None
    render_fn: Optional[RenderFn] = None

    def __post_init__(self) -> None:
        if not self.charts:
            raise InvalidConfiguration("`options.charts` cannot be empty.")
        self.charts = [ChartSpec.from_raw(c) for c in self.charts]
        self.formatters = resolve_formatters(self.formatters)
        for column, order in self.sort.items():
            if order not in SORT_ORDERS:
                raise InvalidConfiguration(
                    f"Sort order for '{column}' must be one of {SORT_ORDERS}, got {order!r}"
                )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TableSetOptions:
        """
        Build options from a plain mapping. camelCase keys (columnNames, renderFn)
        are accepted as aliases.
        """
        charts = data.get("charts")
        if charts is None:
            raise InvalidConfiguration("`options.charts` cannot be null.")
        if isinstance(charts, (str, bytes)) or not isinstance(charts, Sequence):
            raise InvalidConfiguration("`options.charts` must be a list.")

        columns = data.get("columns")
        return cls(
            charts=list(charts),
            formatters=dict(data.get("formatters") or {}),
            column_names=dict(data.get("column_names") or data.get("columnNames") or {}),
            sort=dict(data.get("sort") or {}),
            columns=list(columns) if columns is not None else None,
            render_fn=data.get("render_fn") or data.get("renderFn"),
        )

    @classmethod
    def coerce(cls, options: Union[TableSetOptions, Mapping[str, Any], None]) -> TableSetOptions:
        if options is None:
            raise InvalidConfiguration("`options` cannot be null.")
        if isinstance(options, TableSetOptions):
            return options
        if isinstance(options, Mapping):
            return cls.from_dict(options)
        raise InvalidConfiguration(f"Unsupported options type: {type(options).__name__}")

