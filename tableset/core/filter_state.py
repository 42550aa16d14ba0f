from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping

from .events import FILTER_CHANGE, EventSource

logger = logging.getLogger(__name__)

Filters = Dict[str, List[Any]]


def _unique(values: Iterable[Any]) -> List[Any]:
    out: List[Any] = []
    for v in values:
        if v not in out:
            out.append(v)
    return out


def copy_filters(filters: Mapping[str, Iterable[Any]]) -> Filters:
    """Deep-enough copy: a new dict with new, de-duplicated value lists."""
    return {dimen: _unique(values) for dimen, values in filters.items()}


class FilterState(EventSource):
    """
    The set of filters currently applied to a TableSet.

    Maps dimension -> list of allowed values. A dimension with no key is
    unrestricted. Every mutation notifies subscribers synchronously, so once
    `set_filters` returns all views have already re-rendered.
    """

    def __init__(self) -> None:
        super().__init__()
        self._filters: Filters = {}

    def get_filters(self) -> Filters:
        """
        Return a copy of the current filters; mutating it does not change the state.
        """
        return copy_filters(self._filters)

    @property
    def dimensions(self) -> List[str]:
        return list(self._filters)

    def set_filters(self, filters: Mapping[str, Iterable[Any]]) -> None:
        self._filters = copy_filters(filters)
        logger.debug(
            "filter_change",
            extra={"filters": {k: [str(v) for v in vs] for k, vs in self._filters.items()}},
        )
        self.dispatch(FILTER_CHANGE)

    def remove_filter(self, dimension: str) -> None:
        if dimension not in self._filters:
            return
        filters = self.get_filters()
        del filters[dimension]
        self.set_filters(filters)

    def clear_filters(self) -> None:
        self.set_filters({})

    def subscribe(self, listener: Callable[[], Any]) -> Callable[[], None]:
        """
        Call `listener()` after every change
        :return: a callable which unsubscribes the listener
        """
        return self.add_listener(FILTER_CHANGE, listener)

    def __contains__(self, dimension: object) -> bool:
        return dimension in self._filters

    def __len__(self) -> int:
        return len(self._filters)
