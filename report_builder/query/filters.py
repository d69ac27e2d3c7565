"""
Filter evaluation for the report pipeline.

Every filter is an AND-ed predicate over one attribute. Operators dispatch
through an explicit table; anything outside it falls back to a permissive
policy that keeps the row.
"""

import logging
import math
from typing import Any, Callable, Dict, List, Sequence

from report_builder.catalog.registry import operators_for
from report_builder.catalog.schemas import AttributeDefinition, Row
from report_builder.query.schemas import FilterDefinition, FilterOperator
from report_builder.query.values import parse_date, split_bounds, to_number, to_text

logger = logging.getLogger(__name__)

Predicate = Callable[[Any, str], bool]


# ===== PREDICATES =====


def _contains(cell: Any, value: str) -> bool:
    return value.lower() in to_text(cell).lower()


def _starts_with(cell: Any, value: str) -> bool:
    return to_text(cell).lower().startswith(value.lower())


def _ends_with(cell: Any, value: str) -> bool:
    return to_text(cell).lower().endswith(value.lower())


def _equals(cell: Any, value: str) -> bool:
    return to_text(cell) == value


def _not_equals(cell: Any, value: str) -> bool:
    return to_text(cell) != value


# NaN on either side makes every comparison below false


def _greater(cell: Any, value: str) -> bool:
    return to_number(cell) > to_number(value)


def _greater_or_equal(cell: Any, value: str) -> bool:
    return to_number(cell) >= to_number(value)


def _less(cell: Any, value: str) -> bool:
    return to_number(cell) < to_number(value)


def _less_or_equal(cell: Any, value: str) -> bool:
    return to_number(cell) <= to_number(value)


def _between(cell: Any, value: str) -> bool:
    """Inclusive numeric range; bound order does not matter."""
    first, second = (to_number(part) for part in split_bounds(value))
    if math.isnan(first) or math.isnan(second):
        return False
    number = to_number(cell)
    return min(first, second) <= number <= max(first, second)


def _on(cell: Any, value: str) -> bool:
    return to_text(cell) == value


def _before(cell: Any, value: str) -> bool:
    cell_date, bound = parse_date(cell), parse_date(value)
    if cell_date is None or bound is None:
        # Unparsable dates are neither before nor after anything
        return False
    return cell_date < bound


def _after(cell: Any, value: str) -> bool:
    cell_date, bound = parse_date(cell), parse_date(value)
    if cell_date is None or bound is None:
        return False
    return cell_date > bound


def _date_range(cell: Any, value: str) -> bool:
    """Inclusive date range; the first part is always the lower bound."""
    lower, upper = (parse_date(part) for part in split_bounds(value))
    cell_date = parse_date(cell)
    if cell_date is None or lower is None or upper is None:
        return False
    return lower <= cell_date <= upper


def _keep_row(cell: Any, value: str) -> bool:
    """Permissive policy for operators the evaluator does not know."""
    return True


PREDICATES: Dict[FilterOperator, Predicate] = {
    FilterOperator.CONTAINS: _contains,
    FilterOperator.STARTS_WITH: _starts_with,
    FilterOperator.ENDS_WITH: _ends_with,
    FilterOperator.EQUALS: _equals,
    FilterOperator.NOT_EQUALS: _not_equals,
    FilterOperator.GREATER: _greater,
    FilterOperator.GREATER_OR_EQUAL: _greater_or_equal,
    FilterOperator.LESS: _less,
    FilterOperator.LESS_OR_EQUAL: _less_or_equal,
    FilterOperator.BETWEEN: _between,
    FilterOperator.ON: _on,
    FilterOperator.BEFORE: _before,
    FilterOperator.AFTER: _after,
    FilterOperator.RANGE: _date_range,
}


def predicate_for(operator: str) -> Predicate:
    """Resolve an operator string to its predicate (permissive when unknown)."""
    parsed = FilterOperator.parse(operator)
    if parsed is None:
        return _keep_row
    return PREDICATES[parsed]


class FilterEvaluator:
    """Applies filter predicates to dataset rows."""

    def __init__(self, attributes: Sequence[AttributeDefinition]):
        self.attributes = {a.name: a for a in attributes}

    def check(self, filters: List[FilterDefinition]) -> List[str]:
        """Describe filters that will be ignored or look misconfigured."""
        warnings = []
        for f in filters:
            attribute = self.attributes.get(f.attribute)
            if attribute is None:
                warnings.append(f"Filter on unknown attribute '{f.attribute}' is ignored")
            elif FilterOperator.parse(f.operator) is None:
                warnings.append(
                    f"Unknown operator '{f.operator}' on '{f.attribute}' keeps every row"
                )
            elif f.operator not in operators_for(attribute.type):
                warnings.append(
                    f"Operator '{f.operator}' is not offered for {attribute.type.value} "
                    f"attribute '{f.attribute}'"
                )
        return warnings

    def active_filters(self, filters: List[FilterDefinition]) -> List[FilterDefinition]:
        """Filters that reference a known attribute."""
        active = []
        for f in filters:
            if f.attribute in self.attributes:
                active.append(f)
            else:
                logger.warning("Ignoring filter on unknown attribute '%s'", f.attribute)
        return active

    def matches(self, row: Row, filters: List[FilterDefinition]) -> bool:
        return all(
            predicate_for(f.operator)(row.get(f.attribute), f.value) for f in filters
        )

    def apply(self, rows: List[Row], filters: List[FilterDefinition]) -> List[Row]:
        """Return the rows for which every filter holds."""
        active = self.active_filters(filters)
        if not active:
            return list(rows)
        return [row for row in rows if self.matches(row, active)]
