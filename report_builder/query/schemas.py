"""
Query schemas and types for the report pipeline.

This module defines the report configuration a caller submits and the result
structures the pipeline hands back.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator

from report_builder.core.config import DEFAULT_ROW_LIMIT


class FilterOperator(str, Enum):
    """Filter operators understood by the filter evaluator."""

    # string-like
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    # any type
    EQUALS = "="
    NOT_EQUALS = "!="
    # numeric
    GREATER = ">"
    GREATER_OR_EQUAL = ">="
    LESS = "<"
    LESS_OR_EQUAL = "<="
    BETWEEN = "between"
    # date
    ON = "on"
    BEFORE = "before"
    AFTER = "after"
    RANGE = "range"

    @classmethod
    def parse(cls, value: str) -> Optional["FilterOperator"]:
        """Return the matching operator, or None for an unrecognized one."""
        try:
            return cls(value)
        except ValueError:
            return None


class AggregationFunction(str, Enum):
    """Available aggregation functions."""

    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"
    COUNT = "count"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class FilterDefinition(BaseModel):
    """A predicate over one attribute's value."""

    id: Optional[str] = None
    attribute: str
    operator: str  # narrowed by the UI to the attribute's offered operators
    value: str = ""  # raw text, interpreted per operator

    model_config = ConfigDict(frozen=True)

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class AggregationDefinition(BaseModel):
    attribute: str
    function: AggregationFunction

    model_config = ConfigDict(frozen=True)

    @property
    def column_name(self) -> str:
        """Public result column name, e.g. ``sum(balance)``."""
        return f"{self.function.value}({self.attribute})"


class SortDefinition(BaseModel):
    attribute: str = ""  # empty means no sort
    direction: SortDirection = SortDirection.ASC

    model_config = ConfigDict(frozen=True)


class ReportConfiguration(BaseModel):
    """Declarative description of an ad-hoc report."""

    dataset_id: str
    selected_attributes: List[str] = []
    filters: List[FilterDefinition] = []
    group_by: List[str] = []
    aggregations: List[AggregationDefinition] = []
    sort: SortDefinition = SortDefinition()
    row_limit: int = Field(default=DEFAULT_ROW_LIMIT, gt=0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_aggregated(self) -> bool:
        return bool(self.group_by or self.aggregations)

    def aggregation_columns(self) -> List[str]:
        """Aggregation column names in request order, without duplicates."""
        columns: List[str] = []
        for aggregation in self.aggregations:
            if aggregation.column_name not in columns:
                columns.append(aggregation.column_name)
        return columns


@dataclass
class ResultTable:
    """Ordered columns and rows produced by one pipeline run."""

    columns: List[str]
    rows: List[Dict[str, Any]]


@dataclass
class QueryResult:
    """Result of running a configuration through the query engine."""

    table: ResultTable
    filtered_row_count: int
    warnings: List[str] = field(default_factory=list)
