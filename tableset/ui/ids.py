from __future__ import annotations

__all__ = ["IDs", "table_id", "filter_remove_id"]


class IDs:
    class Control:
        TITLE = "tableset-title"
        FILTER_BAR = "filter-bar"
        CLICK_ACTION = "click-action"
        COLUMNS = "tableset-columns"
        STATUS_BAR = "status-bar"
        CLEAR_FILTERS = "clear-filters"

    class Pattern:
        # pattern-matching "type" strings
        TABLE = "tableset-table"
        FILTER_REMOVE = "filter-remove"


def table_id(index: int) -> dict:
    return {"type": IDs.Pattern.TABLE, "index": index}


def filter_remove_id(dimension: str) -> dict:
    return {"type": IDs.Pattern.FILTER_REMOVE, "index": dimension}
