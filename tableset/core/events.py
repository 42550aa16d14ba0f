from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping

CELL_CLICK = "cell_click"
SORT_CHANGE = "sort_change"
GRAPH_BUTTON_CLICK = "graph_button_click"
FILTER_CHANGE = "filter_change"


class ClickAction(str, Enum):
    SELECT = "select"
    TOGGLE = "toggle"


@dataclass(frozen=True)
class ClickEvent:
    """
    A click on a dimension value inside a view.

    - select: filter the dimension down to this single value
    - toggle: add or remove this value from the dimension's filter
    """
    dimension: str
    value: Any
    action: ClickAction = ClickAction.SELECT


@dataclass(frozen=True)
class SortChangeEvent:
    sort: Dict[str, str]


@dataclass(frozen=True)
class GraphButtonClickEvent:
    detail: Mapping[str, Any] = field(default_factory=dict)


class EventSource:
    """
    Synchronous publish/subscribe.

    Listeners are called in registration order and every listener has run
    before `dispatch` returns. There is no queueing: a listener that
    dispatches again is handled re-entrantly, the same way a direct call is.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Callable[..., Any]]] = {}

    def add_listener(self, event_type: str, listener: Callable[..., Any]) -> Callable[[], None]:
        """
        Register a listener for an event type
        :return: a callable that removes the listener again
        """
        self._listeners.setdefault(event_type, []).append(listener)

        def remove() -> None:
            self.remove_listener(event_type, listener)

        return remove

    def remove_listener(self, event_type: str, listener: Callable[..., Any]) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def dispatch(self, event_type: str, *args: Any) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners.get(event_type, [])):
            listener(*args)
