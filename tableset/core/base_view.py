from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from .data_cube import Row
from .events import EventSource


class BaseView(EventSource, ABC):
    """
    Abstract base class for the leaf views of a TableSet.

    Defines the contract that every view must follow
    - take its 'dimension' at construction - "totals" for the totals view
    - implement 'render_rows' - show these rows, greying those the predicate rejects
    - implement 'set_sort_options' - reorder by the shared sort configuration
    - emit 'cell_click', 'sort_change' and 'graph_button_click' events
    """

    def __init__(self, dimension: str) -> None:
        super().__init__()
        self.dimension = dimension

    @abstractmethod
    def render_rows(
        self,
        rows: List[Row],
        is_selected: Optional[Callable[[Row], bool]] = None,
    ) -> None:
        """
        Replace the rows shown by this view
        :param rows: one row per dimension value, as produced by DataCube.select
        :param is_selected: None if every row is shown normally
        """
        raise NotImplementedError()

    @abstractmethod
    def set_sort_options(self, sort: Dict[str, str]) -> None:
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Column width syncing. Views that can't measure columns opt out.
    # ------------------------------------------------------------------
    def numeric_column_widths(self) -> Dict[str, int]:
        return {}

    def set_column_min_widths(self, widths: Dict[str, int]) -> None:
        pass
