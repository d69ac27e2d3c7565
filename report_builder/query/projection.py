"""Projection, sorting and row-cap stages of the report pipeline."""

import math
from typing import Any, List, Tuple

from report_builder.catalog.schemas import Row, ValueKind
from report_builder.query.schemas import SortDefinition, SortDirection
from report_builder.query.values import to_number, to_text


def project(rows: List[Row], columns: List[str]) -> List[Row]:
    """Copy each row onto ``columns``, preserving row order."""
    return [{column: row.get(column) for column in columns} for row in rows]


def _sort_value(value: Any, kind: ValueKind) -> Tuple[bool, Any]:
    """Return (is_missing, comparable value) for one cell."""
    if value is None:
        return True, None
    if kind == ValueKind.NUMERIC:
        number = to_number(value)
        if math.isnan(number):
            return True, None
        return False, number
    return False, to_text(value)


def sort_rows(rows: List[Row], sort: SortDefinition, kind: ValueKind) -> List[Row]:
    """
    Stable single-key sort.

    Numeric columns compare as numbers, everything else as text. Rows whose
    sort value is missing keep their relative order and always go last.
    """
    if not sort.attribute:
        return list(rows)

    present: List[Tuple[Any, Row]] = []
    missing: List[Row] = []
    for row in rows:
        is_missing, value = _sort_value(row.get(sort.attribute), kind)
        if is_missing:
            missing.append(row)
        else:
            present.append((value, row))

    ordered = sorted(present, key=lambda item: item[0], reverse=sort.direction == SortDirection.DESC)
    return [row for _, row in ordered] + missing


def limit_rows(rows: List[Row], row_limit: int) -> List[Row]:
    """Keep the first ``row_limit`` rows."""
    return rows[:row_limit]
