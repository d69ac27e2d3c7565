"""
Query text builder for report previews.

Renders a report configuration as a single-line, SQL-like string so users can
read what their report does. The text is display-only: it is never executed,
and values are interpolated as typed.
"""

from typing import List, Optional

from report_builder.core.config import QUERY_TEXT_ROW_CAP
from report_builder.query.schemas import FilterDefinition, FilterOperator, ReportConfiguration
from report_builder.query.values import split_bounds


class QueryTextBuilder:
    """Builds the SQL-like preview text for a report configuration."""

    def __init__(self, row_cap: int = QUERY_TEXT_ROW_CAP):
        self.row_cap = row_cap

    def render(self, config: ReportConfiguration, table_name: Optional[str] = None) -> str:
        """Render ``config`` against ``table_name`` (defaults to the dataset id)."""
        table = table_name or config.dataset_id
        sql = f"SELECT {self._build_columns(config)} FROM {table}"

        where = self._build_where(config.filters)
        if where:
            sql += f" WHERE {where}"
        if config.group_by:
            sql += f" GROUP BY {', '.join(config.group_by)}"
        if config.sort.attribute:
            sql += f" ORDER BY {config.sort.attribute} {config.sort.direction.value}"
        return sql + f" LIMIT {self.row_cap};"

    def _build_columns(self, config: ReportConfiguration) -> str:
        if config.selected_attributes:
            return ", ".join(config.selected_attributes)
        if config.is_aggregated:
            columns: List[str] = list(config.group_by)
            for aggregation in config.aggregations:
                func = aggregation.function.value
                columns.append(
                    f'{func.upper()}({aggregation.attribute}) AS "{aggregation.column_name}"'
                )
            return ", ".join(columns)
        return "*"

    def _build_where(self, filters: List[FilterDefinition]) -> str:
        return " AND ".join(self._build_predicate(f) for f in filters)

    def _build_predicate(self, f: FilterDefinition) -> str:
        col, value = f.attribute, f.value
        operator = FilterOperator.parse(f.operator)

        if operator == FilterOperator.CONTAINS:
            return f"{col} LIKE '%{value}%'"
        if operator == FilterOperator.STARTS_WITH:
            return f"{col} LIKE '{value}%'"
        if operator == FilterOperator.ENDS_WITH:
            return f"{col} LIKE '%{value}'"
        if operator == FilterOperator.BETWEEN:
            lower, upper = split_bounds(value)
            return f"{col} BETWEEN {lower} AND {upper}"
        if operator == FilterOperator.RANGE:
            lower, upper = split_bounds(value)
            return f"{col} BETWEEN '{lower}' AND '{upper}'"
        if operator == FilterOperator.ON:
            return f"{col} = '{value}'"
        if operator == FilterOperator.BEFORE:
            return f"{col} < '{value}'"
        if operator == FilterOperator.AFTER:
            return f"{col} > '{value}'"

        # Comparison operators and anything unrecognized render literally
        rendered = f"'{value}'" if " " in value else value
        return f"{col} {f.operator} {rendered}"
