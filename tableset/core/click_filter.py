from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Sequence

from .events import ClickAction, ClickEvent
from .filter_state import Filters, copy_filters

logger = logging.getLogger(__name__)

DomainFn = Callable[[str], Sequence[Any]]


def next_filters(
    filters: Mapping[str, Sequence[Any]],
    event: ClickEvent,
    all_values: DomainFn,
) -> Filters:
    """
    Compute the filters that result from clicking a value.

    - select: the dimension is filtered to exactly that value
    - toggle on an unfiltered dimension: every other value of the dimension is kept,
      i.e. the clicked value is hidden
    - toggle on a value in the filter: the value is removed, and the whole filter
      once no values remain
    - toggle on a value outside the filter: the value is added back. Adding back the
      last hidden value leaves a filter that lists the whole domain; it is kept as is.

    :param filters: the current filters, not modified
    :param event: the click
    :param all_values: returns every value of a dimension in the unfiltered data
    :return: a new filters mapping
    """
    result = copy_filters(filters)
    dimen, value = event.dimension, event.value
    action = ClickAction(event.action)

    if action is ClickAction.SELECT:
        result[dimen] = [value]
        return result

    if dimen not in result:
        domain: List[Any] = list(all_values(dimen))
        if value not in domain:
            logger.debug(
                "Toggled a value outside the dimension's domain",
                extra={"dimension": dimen, "value": str(value)},
            )
        result[dimen] = [v for v in domain if v != value]
    elif value in result[dimen]:
        result[dimen] = [v for v in result[dimen] if v != value]
        if not result[dimen]:
            del result[dimen]
    else:
        result[dimen].append(value)

    return result
