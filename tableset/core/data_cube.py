from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .exceptions import DataCubeError

Row = Dict[str, Any]
Filters = Mapping[str, Sequence[Any]]


@dataclass(frozen=True)
class QueryResult:
    """
    Result of DataCube.select: one row per group, dimensions first, then metrics.
    """
    frame: pd.DataFrame

    def get_rows(self) -> List[Row]:
        # to_dict boxes numpy scalars into native Python values
        return self.frame.to_dict("records")

    def __len__(self) -> int:
        return len(self.frame)


class DataCube:
    """
    In-memory aggregation cube used as the shared dataset for a TableSet.

    Includes:
    - Rows keyed by categorical dimensions with numeric metrics
    - Grouping by any subset of dimensions (metrics are summed)
    - Cached filtering by {dimension: [allowed values]}
    """

    MAX_WHERE_CACHE = 128

    # -------------------------------------------------------------------------
    # Constructor
    # -------------------------------------------------------------------------
    def __init__(
        self,
        dimensions: Sequence[str],
        metrics: Sequence[str],
        rows: Optional[Iterable[Mapping[str, Any]]] = None,
    ) -> None:
        self.dimensions: List[str] = list(dimensions)
        self.metrics: List[str] = list(metrics)
        self._frame = self._empty_frame()

        # Cache of filtered DataCube objects
        self._where_cache: Dict[Tuple[Tuple[str, Tuple[str, ...]], ...], DataCube] = {}

        if rows is not None:
            self.add_rows(rows)

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        dimensions: Sequence[str],
        metrics: Sequence[str],
    ) -> DataCube:
        cube = cls(dimensions, metrics)
        missing = [c for c in cube.dimensions + cube.metrics if c not in frame.columns]
        if missing:
            raise DataCubeError(f"Frame is missing columns: {missing}")
        cube._frame = cube._normalise(frame[cube.dimensions + cube.metrics])
        return cube

    def _empty_frame(self) -> pd.DataFrame:
        frame = pd.DataFrame(columns=self.dimensions + self.metrics)
        return self._normalise(frame)

    def _normalise(self, frame: pd.DataFrame) -> pd.DataFrame:
        frame = frame.reset_index(drop=True)
        for metric in self.metrics:
            frame[metric] = pd.to_numeric(frame[metric]).fillna(0)
        for dimen in self.dimensions:
            frame[dimen] = frame[dimen].astype(object)
        return frame

    # -------------------------------------------------------------------------
    # Loading rows
    # -------------------------------------------------------------------------
    def add_row(self, row: Mapping[str, Any]) -> None:
        self.add_rows([row])

    def add_rows(self, rows: Iterable[Mapping[str, Any]]) -> None:
        records = []
        for row in rows:
            missing = [d for d in self.dimensions if d not in row]
            if missing:
                raise DataCubeError(f"Row is missing dimensions {missing}: {dict(row)!r}")
            records.append({c: row.get(c, 0) for c in self.dimensions + self.metrics})

        if not records:
            return

        added = self._normalise(pd.DataFrame.from_records(records, columns=self.dimensions + self.metrics))
        if self._frame.empty:
            self._frame = added
        else:
            self._frame = self._normalise(pd.concat([self._frame, added], ignore_index=True))
        self.clear_caches()

    def clear_caches(self) -> None:
        self._where_cache.clear()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    def _check_dimensions(self, dimensions: Iterable[str]) -> None:
        unknown = [d for d in dimensions if d not in self.dimensions]
        if unknown:
            raise DataCubeError(
                f"Unknown dimensions {unknown}; cube has {self.dimensions}"
            )

    def select(self, dimensions: Sequence[str]) -> QueryResult:
        """
        Group all rows by `dimensions`, summing every metric.

        An empty sequence yields exactly one grand-total row, even on an empty cube.
        Groups keep the order in which their first row was added.
        """
        dimensions = list(dimensions)
        self._check_dimensions(dimensions)

        if not dimensions:
            totals = {m: self._frame[m].sum() for m in self.metrics}
            return QueryResult(pd.DataFrame([totals], columns=self.metrics))

        grouped = (
            self._frame.groupby(dimensions, sort=False, dropna=False)[self.metrics]
            .sum()
            .reset_index()
        )
        return QueryResult(grouped[dimensions + self.metrics])

    def _where_cache_key(self, filters: Filters) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        return tuple(
            sorted(
                (dimen, tuple(sorted(repr(v) for v in values)))
                for dimen, values in filters.items()
            )
        )

    def where(self, filters: Filters) -> DataCube:
        """
        Return a new DataCube holding only rows whose value for each filtered
        dimension is one of the allowed values. Results are cached per filter set.
        """
        if not filters:
            return self

        self._check_dimensions(filters.keys())

        key = self._where_cache_key(filters)
        cached = self._where_cache.get(key)
        if cached is not None:
            return cached

        mask = np.ones(len(self._frame), dtype=bool)
        for dimen, values in filters.items():
            mask &= self._frame[dimen].isin(list(values)).to_numpy()

        subset = DataCube(self.dimensions, self.metrics)
        subset._frame = self._frame[mask].reset_index(drop=True)

        self._where_cache[key] = subset

        # Prevent unbounded growth
        if len(self._where_cache) > self.MAX_WHERE_CACHE:
            self._where_cache.clear()

        return subset

    def dimension_values(self, dimension: str) -> List[Any]:
        """All distinct values of one dimension, in first-seen order."""
        return [row[dimension] for row in self.select([dimension]).get_rows()]

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------
    @property
    def frame(self) -> pd.DataFrame:
        return self._frame

    def __len__(self) -> int:
        return len(self._frame)
