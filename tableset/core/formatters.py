from __future__ import annotations

import re
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .exceptions import InvalidConfiguration

Formatter = Callable[[Any], str]

_HTML_TAG = re.compile(r"<[^>]*>?")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def thousands(value: Any) -> str:
    """12345.6 -> '12,346'"""
    if not _is_number(value):
        return "" if value is None else str(value)
    return f"{value:,.0f}"


def fixed0(value: Any) -> str:
    return f"{value:.0f}" if _is_number(value) else ("" if value is None else str(value))


def fixed1(value: Any) -> str:
    return f"{value:.1f}" if _is_number(value) else ("" if value is None else str(value))


def fixed2(value: Any) -> str:
    return f"{value:.2f}" if _is_number(value) else ("" if value is None else str(value))


def percent(value: Any) -> str:
    """0.1234 -> '12.3%'"""
    if not _is_number(value):
        return "" if value is None else str(value)
    return f"{value * 100:.1f}%"


FORMATTERS: Dict[str, Formatter] = {
    "thousands": thousands,
    "fixed0": fixed0,
    "fixed1": fixed1,
    "fixed2": fixed2,
    "percent": percent,
}


def resolve_formatters(
    formatters: Optional[Mapping[str, Union[str, Formatter]]],
) -> Dict[str, Formatter]:
    """
    Turn a {column: formatter-or-name} mapping into {column: callable}.

    Raises:
        InvalidConfiguration: if a name is not in FORMATTERS
    """
    resolved: Dict[str, Formatter] = {}
    for column, fmt in (formatters or {}).items():
        if callable(fmt):
            resolved[column] = fmt
            continue
        try:
            resolved[column] = FORMATTERS[fmt]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown formatter '{fmt}' for column '{column}'. "
                f"Known formatters: {sorted(FORMATTERS)}"
            )
    return resolved


def strip_html(text: str) -> str:
    return _HTML_TAG.sub("", text)


def format_column_name(key: str, column_names: Optional[Mapping[str, str]] = None) -> str:
    """
    Human readable name for a column: the configured display name if there is one,
    else 'clickThroughRate' / 'click_through_rate' -> 'Click Through Rate'.
    """
    if column_names and key in column_names:
        return column_names[key]
    words = _CAMEL_BOUNDARY.sub(" ", key).replace("_", " ").split()
    return " ".join(w[:1].upper() + w[1:] for w in words)
