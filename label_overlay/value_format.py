"""Resolve and format the dynamic value shown next to the static label."""
from __future__ import annotations

import datetime as _dt
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

_LOGGER_NAME = "LabelOverlay.Client"
_CLIENT_LOGGER = logging.getLogger(_LOGGER_NAME)

BLANK_TEXT = "(blank)"
MAX_DECIMAL_PLACES = 4
NULL_VALUE_MESSAGE = "Query contains null value"
MULTIPLE_ROWS_MESSAGE = "Query returned more than one row, please filter data to return one row"

_NUMERIC_CHARS = set("#0,.")
_DATE_TOKENS = (
    ("yyyy", "%Y"),
    ("yy", "%y"),
    ("MMMM", "%B"),
    ("MMM", "%b"),
    ("MM", "%m"),
    ("dddd", "%A"),
    ("ddd", "%a"),
    ("dd", "%d"),
    ("HH", "%H"),
    ("hh", "%I"),
    ("mm", "%M"),
    ("ss", "%S"),
    ("tt", "%p"),
)
_DATE_TOKEN_RE = re.compile("|".join(token for token, _ in _DATE_TOKENS))
_DATE_TOKEN_MAP = dict(_DATE_TOKENS)


@dataclass(frozen=True)
class DynamicValue:
    text: str
    row_count: int
    url: Optional[str] = None

    @property
    def is_single_row(self) -> bool:
        return self.row_count == 1


def decimal_places(value: Any) -> int:
    """Count the decimals of a positive number as written, e.g. 2.125 -> 3."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if value <= 0 or not math.isfinite(value):
        return 0
    text = repr(float(value)) if isinstance(value, float) else str(value)
    if "e" in text or "E" in text:
        return 0
    _, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0")
    return len(fraction)


def row_count_message(row_count: int) -> Optional[str]:
    if row_count == 0:
        return NULL_VALUE_MESSAGE
    if row_count > 1:
        return MULTIPLE_ROWS_MESSAGE
    return None


def _plain(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _strip_quotes(text: str) -> str:
    return text.replace('"', "").replace("'", "").replace("\\", "")


def _format_date(value: _dt.date, fmt: str) -> str:
    pattern = _DATE_TOKEN_RE.sub(lambda match: _DATE_TOKEN_MAP[match.group(0)], fmt)
    return value.strftime(_strip_quotes(pattern))


def _split_numeric_pattern(fmt: str) -> Optional[tuple]:
    start = next((idx for idx, char in enumerate(fmt) if char in _NUMERIC_CHARS), None)
    if start is None:
        return None
    end = start
    while end < len(fmt) and fmt[end] in _NUMERIC_CHARS:
        end += 1
    return fmt[:start], fmt[start:end], fmt[end:]


def _format_number(value: float, fmt: str, precision: Optional[int]) -> str:
    section = fmt.split(";", 1)[0]
    parts = _split_numeric_pattern(section)
    if parts is None:
        return _strip_quotes(section)
    prefix, core, suffix = parts
    if "%" in prefix or "%" in suffix:
        value *= 100.0
    integer_part, _, fraction_part = core.partition(".")
    grouping = "," in integer_part
    max_decimals = sum(1 for char in fraction_part if char in "0#")
    min_decimals = sum(1 for char in fraction_part if char == "0")
    if precision is not None:
        max_decimals = max(0, int(precision))
        min_decimals = min(min_decimals, max_decimals)
    text = f"{abs(value):{',' if grouping else ''}.{max_decimals}f}"
    if max_decimals > min_decimals and "." in text:
        whole, _, fraction = text.partition(".")
        fraction = fraction.rstrip("0")
        if len(fraction) < min_decimals:
            fraction = fraction.ljust(min_decimals, "0")
        text = f"{whole}.{fraction}" if fraction else whole
    sign = "-" if value < 0 and any(char != "0" for char in text if char.isdigit()) else ""
    return f"{sign}{_strip_quotes(prefix)}{text}{_strip_quotes(suffix)}"


def format_value(value: Any, fmt: Optional[str] = None, precision: Optional[int] = None) -> str:
    """Format ``value`` with a .NET-style format string such as ``#,0.00`` or ``dd/MM/yyyy``."""
    if value is None:
        return ""
    if not fmt:
        return _plain(value)
    if isinstance(value, (_dt.date, _dt.datetime)):
        return _format_date(value, fmt)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _plain(value)
    if not math.isfinite(value):
        return _plain(value)
    return _format_number(float(value), fmt, precision)


def _column_values(column: Mapping[str, Any]) -> Sequence[Any]:
    values = column.get("values")
    if isinstance(values, (list, tuple)):
        return values
    return ()


def _is_url_column(column: Mapping[str, Any]) -> bool:
    column_type = column.get("type")
    if isinstance(column_type, Mapping):
        column_type = column_type.get("category")
    roles = column.get("roles")
    has_url_role = isinstance(roles, Mapping) and bool(roles.get("URL"))
    return column_type == "WebUrl" and has_url_role


def resolve_url(data_view: Mapping[str, Any]) -> Optional[str]:
    url: Optional[str] = None
    for key in ("categories", "values"):
        columns = data_view.get(key)
        if not isinstance(columns, (list, tuple)):
            continue
        for column in columns:
            if isinstance(column, Mapping) and _is_url_column(column):
                url = ",".join(_plain(item) for item in _column_values(column))
    return url


def resolve_dynamic_value(data_view: Optional[Mapping[str, Any]]) -> DynamicValue:
    """Pick the first category (or measure) value and format it with its column format."""
    if not isinstance(data_view, Mapping):
        return DynamicValue(text="", row_count=0)
    url = resolve_url(data_view)
    categories = data_view.get("categories")
    measures = data_view.get("values")
    if isinstance(categories, (list, tuple)) and categories and isinstance(categories[0], Mapping):
        column = categories[0]
        values = _column_values(column)
        raw = values[0] if values else BLANK_TEXT
        fmt = column.get("format")
        text = format_value(raw, fmt) if fmt and values else _plain(raw)
        return DynamicValue(text=text, row_count=len(values), url=url)
    if isinstance(measures, (list, tuple)) and measures and isinstance(measures[0], Mapping):
        column = measures[0]
        values = _column_values(column)
        raw = values[0] if values and values[0] else 0
        fmt = column.get("format")
        if fmt:
            places = min(decimal_places(raw), MAX_DECIMAL_PLACES)
            text = format_value(raw, fmt, precision=places)
        else:
            text = _plain(raw)
        return DynamicValue(text=text, row_count=len(values), url=url)
    _CLIENT_LOGGER.debug("Data view has no category or measure columns")
    return DynamicValue(text="", row_count=0, url=url)
