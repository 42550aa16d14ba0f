"""
Which rows each view shows for a given set of filters.

A view never applies the filter on its own dimension. It is queried with
that filter removed, so every value of the dimension stays on screen, and
gets an `is_selected` predicate so rows outside the filter can be greyed
out instead of disappearing. The totals view is the exception: it always
reflects every active filter.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .data_cube import DataCube, Row

TOTALS = "totals"

SelectionPredicate = Callable[[Row], bool]


@dataclass(frozen=True)
class ViewQuery:
    dimension: str
    source: DataCube
    rows: List[Row]
    is_selected: Optional[SelectionPredicate] = None


def exclude_dimension(
    filters: Mapping[str, Sequence[Any]], dimension: str
) -> Dict[str, List[Any]]:
    return {k: list(v) for k, v in filters.items() if k != dimension}


def _selected_in(dimension: str, values: Sequence[Any]) -> SelectionPredicate:
    allowed = list(values)

    def is_selected(row: Row) -> bool:
        return row.get(dimension) in allowed

    return is_selected


def source_for_view(
    data_cube: DataCube,
    filters: Mapping[str, Sequence[Any]],
    dimension: str,
    filtered: Optional[DataCube] = None,
) -> Tuple[DataCube, Optional[SelectionPredicate]]:
    """
    Return the cube a view should select from, plus its selection predicate.

    :param data_cube: the unfiltered cube
    :param filters: the active filters
    :param dimension: the view's dimension, or TOTALS
    :param filtered: optional precomputed `data_cube.where(filters)`
    """
    if dimension == TOTALS or dimension not in filters:
        source = filtered if filtered is not None else data_cube.where(filters)
        return source, None

    source = data_cube.where(exclude_dimension(filters, dimension))
    return source, _selected_in(dimension, filters[dimension])


def query_for_view(
    data_cube: DataCube,
    filters: Mapping[str, Sequence[Any]],
    dimension: str,
    filtered: Optional[DataCube] = None,
) -> ViewQuery:
    source, is_selected = source_for_view(data_cube, filters, dimension, filtered)

    if dimension == TOTALS:
        # There's only one row. The "totals" key comes first so it renders as the first column.
        totals_row = source.select([]).get_rows()[0]
        return ViewQuery(
            dimension=dimension,
            source=source,
            rows=[{TOTALS: "", **totals_row}],
        )

    return ViewQuery(
        dimension=dimension,
        source=source,
        rows=source.select([dimension]).get_rows(),
        is_selected=is_selected,
    )
