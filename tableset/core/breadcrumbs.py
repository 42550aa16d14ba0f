from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional

from .filter_state import FilterState
from .formatters import format_column_name, strip_html


@dataclass(frozen=True)
class Breadcrumb:
    """
    One active filter, as shown in the filter bar.

    :param dimension: the filtered dimension; passed back to `remove`
    :param caption: short text for the chip
    :param title: full caption as tooltip text when `caption` had to be shortened, else None
    """
    dimension: str
    caption: str
    title: Optional[str] = None


class FilterBreadcrumbs:
    """
    Presents a FilterState as a list of removable breadcrumbs.

    Holds no state of its own beyond the derived breadcrumbs; removing one
    goes straight back to the FilterState.
    """

    CAPTION_MAX_LENGTH = 20
    TITLE_MAX_LENGTH = 200

    def __init__(
        self,
        filter_state: FilterState,
        formatters: Optional[Mapping[str, Callable]] = None,
        column_names: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.filter_state = filter_state
        self.formatters: Dict[str, Callable] = dict(formatters or {})
        self.column_names: Dict[str, str] = dict(column_names or {})
        self.breadcrumbs: List[Breadcrumb] = []
        self.filter_state.subscribe(self.on_filter_changed)
        self.redraw()

    def caption_for(self, dimension: str, values: List) -> Breadcrumb:
        formatter = self.formatters.get(dimension)
        # Formatters often wrap values in a link for table cells; only the text is wanted here.
        formatted = [strip_html(formatter(v)) if formatter else str(v) for v in values]
        caption = ", ".join(formatted)

        if len(caption) > self.CAPTION_MAX_LENGTH:
            return Breadcrumb(
                dimension=dimension,
                caption=f"{len(values)} {format_column_name(dimension, self.column_names)}",
                title=caption[: self.TITLE_MAX_LENGTH],
            )
        return Breadcrumb(dimension=dimension, caption=caption)

    def redraw(self) -> None:
        self.breadcrumbs = [
            self.caption_for(dimension, values)
            for dimension, values in self.filter_state.get_filters().items()
        ]

    def remove(self, dimension: str) -> None:
        self.filter_state.remove_filter(dimension)

    def on_filter_changed(self) -> None:
        self.redraw()
