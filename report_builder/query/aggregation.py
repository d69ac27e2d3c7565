"""In-memory group-by / aggregation for the report pipeline."""

import math
from typing import Any, Dict, List, Optional, Tuple

from report_builder.catalog.schemas import Row
from report_builder.query.schemas import AggregationDefinition, AggregationFunction
from report_builder.query.values import normalize_number, to_number, to_text


class _Accumulator:
    """Running state for one aggregation within one group."""

    def __init__(self, function: AggregationFunction):
        self.function = function
        self.total = 0.0
        self.count = 0
        if function == AggregationFunction.MIN:
            self.extreme = math.inf
        elif function == AggregationFunction.MAX:
            self.extreme = -math.inf
        else:
            self.extreme = math.nan

    def add(self, value: Any) -> None:
        if self.function == AggregationFunction.COUNT:
            self.count += 1
            return

        number = to_number(value)
        if math.isnan(number):
            # Non-numeric values never poison the running state
            return
        if self.function == AggregationFunction.SUM:
            self.total += number
        elif self.function == AggregationFunction.AVG:
            self.total += number
            self.count += 1
        elif self.function == AggregationFunction.MIN:
            self.extreme = min(self.extreme, number)
        elif self.function == AggregationFunction.MAX:
            self.extreme = max(self.extreme, number)

    def finalize(self) -> Optional[Any]:
        if self.function == AggregationFunction.COUNT:
            return self.count
        if self.function == AggregationFunction.SUM:
            return normalize_number(self.total)
        if self.function == AggregationFunction.AVG:
            if self.count == 0:
                return 0
            return normalize_number(self.total / self.count)
        if math.isinf(self.extreme):
            # min/max saw no numeric value
            return None
        return normalize_number(self.extreme)


class _Group:
    def __init__(self, group_values: Dict[str, Any], aggregations: List[AggregationDefinition]):
        self.group_values = group_values
        self.accumulators: Dict[str, Tuple[AggregationDefinition, _Accumulator]] = {}
        for aggregation in aggregations:
            # Repeated attribute/function pairs share one column
            if aggregation.column_name not in self.accumulators:
                self.accumulators[aggregation.column_name] = (
                    aggregation,
                    _Accumulator(aggregation.function),
                )

    def add(self, row: Row) -> None:
        for aggregation, accumulator in self.accumulators.values():
            accumulator.add(row.get(aggregation.attribute))

    def finalize(self) -> Row:
        result: Row = dict(self.group_values)
        for column, (_, accumulator) in self.accumulators.items():
            result[column] = accumulator.finalize()
        return result


class AggregationEngine:
    """Groups rows by key and reduces each group in a single pass."""

    def __init__(self, group_by: List[str], aggregations: List[AggregationDefinition]):
        self.group_by = list(group_by)
        self.aggregations = list(aggregations)

    def columns(self) -> List[str]:
        columns = list(self.group_by)
        for aggregation in self.aggregations:
            if aggregation.column_name not in columns:
                columns.append(aggregation.column_name)
        return columns

    def group_key(self, row: Row) -> Tuple[str, ...]:
        return tuple(to_text(row.get(attribute)) for attribute in self.group_by)

    def aggregate(self, rows: List[Row]) -> List[Row]:
        """One finalized row per distinct group key, in first-seen order."""
        groups: Dict[Tuple[str, ...], _Group] = {}
        for row in rows:
            key = self.group_key(row)
            group = groups.get(key)
            if group is None:
                group = _Group({g: row.get(g) for g in self.group_by}, self.aggregations)
                groups[key] = group
            group.add(row)
        return [group.finalize() for group in groups.values()]


def aggregate(
    rows: List[Row], group_by: List[str], aggregations: List[AggregationDefinition]
) -> List[Row]:
    return AggregationEngine(group_by, aggregations).aggregate(rows)
