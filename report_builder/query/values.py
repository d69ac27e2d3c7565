"""Scalar coercion helpers shared by the query stages."""

import math
from datetime import date, datetime, timezone
from typing import Any, List, Optional, Tuple, Union

Number = Union[int, float]


def to_text(value: Any) -> str:
    """Render a cell value as display text; absent values become ``""``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def to_number(value: Any) -> float:
    """Coerce to float, returning NaN when the value is not numeric."""
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text or "_" in text:
            return math.nan
        try:
            number = float(text)
        except ValueError:
            return math.nan
    # Only finite values count as numeric
    return number if math.isfinite(number) else math.nan


def normalize_number(value: float) -> Number:
    """Emit integral floats as ints so results read like the source data."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 2 ** 53:
        return int(value)
    return value


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a calendar date (ISO 8601); None when unparsable."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif value is None:
        return None
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def split_bounds(value: str) -> Tuple[str, str]:
    """Split a two-part ``a,b`` bound string; a missing part is ``""``."""
    parts: List[str] = str(value).split(",")
    lower = parts[0]
    upper = parts[1] if len(parts) > 1 else ""
    return lower, upper
