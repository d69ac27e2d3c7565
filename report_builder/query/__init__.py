"""
Query module for the report builder.

This module turns a declarative report configuration into a result table:
- FilterEvaluator: AND-ed, operator-specific row predicates
- AggregationEngine: single-pass group-by with finalized aggregates
- Projection / sort / row cap
- QueryTextBuilder: display-only SQL-like rendering of a configuration
- QueryEngine: runs the stages in order against one dataset
"""

from .aggregation import AggregationEngine
from .builder import QueryTextBuilder
from .engine import QueryEngine
from .filters import FilterEvaluator
from .schemas import (
    # Configuration
    ReportConfiguration,
    FilterDefinition,
    AggregationDefinition,
    SortDefinition,
    # Results
    ResultTable,
    QueryResult,
    # Enums
    FilterOperator,
    AggregationFunction,
    SortDirection,
)

__all__ = [
    # Main classes
    "AggregationEngine",
    "FilterEvaluator",
    "QueryEngine",
    "QueryTextBuilder",
    # Configuration types
    "ReportConfiguration",
    "FilterDefinition",
    "AggregationDefinition",
    "SortDefinition",
    # Result types
    "ResultTable",
    "QueryResult",
    # Enums
    "FilterOperator",
    "AggregationFunction",
    "SortDirection",
]
