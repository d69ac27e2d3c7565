# report_builder/query/engine.py
"""Query engine running a report configuration against an in-memory dataset."""

import logging
from typing import List

from report_builder.catalog.schemas import DatasetDefinition, ValueKind
from report_builder.core.config import DEFAULT_COLUMN_COUNT
from report_builder.core.exceptions import ReportConfigurationError
from report_builder.query.aggregation import AggregationEngine
from report_builder.query.filters import FilterEvaluator
from report_builder.query.projection import limit_rows, project, sort_rows
from report_builder.query.schemas import QueryResult, ReportConfiguration, ResultTable

logger = logging.getLogger(__name__)


class QueryEngine:
    """Filter → (aggregate | project) → sort → limit, over one dataset."""

    def __init__(self, default_column_count: int = DEFAULT_COLUMN_COUNT):
        self.default_column_count = default_column_count

    # ===== VALIDATION =====

    def validate(self, config: ReportConfiguration, dataset: DatasetDefinition) -> None:
        """Raise ReportConfigurationError for references the schema cannot satisfy."""
        if config.dataset_id != dataset.id:
            raise ReportConfigurationError(
                f"Configuration targets dataset '{config.dataset_id}' but was run against '{dataset.id}'"
            )

        known = set(dataset.attribute_names())
        problems = []

        unknown_selected = [a for a in config.selected_attributes if a not in known]
        if unknown_selected:
            problems.append(f"selected attributes {unknown_selected}")

        unknown_group_by = [a for a in config.group_by if a not in known]
        if unknown_group_by:
            problems.append(f"group-by attributes {unknown_group_by}")

        unknown_aggregated = [a.attribute for a in config.aggregations if a.attribute not in known]
        if unknown_aggregated:
            problems.append(f"aggregation attributes {unknown_aggregated}")

        # Sorting may also target an aggregation column such as sum(amount)
        sortable = known | set(config.aggregation_columns())
        unknown_sort = [config.sort.attribute] if config.sort.attribute and config.sort.attribute not in sortable else []
        if unknown_sort:
            problems.append(f"sort attribute '{unknown_sort[0]}'")

        if problems:
            message = f"Unknown attributes for dataset '{dataset.id}': " + "; ".join(problems)
            logger.info(message)
            raise ReportConfigurationError(
                message,
                attributes=unknown_selected + unknown_group_by + unknown_aggregated + unknown_sort,
            )

    def collect_warnings(self, config: ReportConfiguration, dataset: DatasetDefinition) -> List[str]:
        warnings = FilterEvaluator(dataset.attributes).check(config.filters)
        sort_attribute = config.sort.attribute
        if sort_attribute and config.is_aggregated:
            result_columns = AggregationEngine(config.group_by, config.aggregations).columns()
            if sort_attribute not in result_columns:
                warnings.append(
                    f"Sort attribute '{sort_attribute}' is not a column of the grouped result; rows keep group order"
                )
        return warnings

    # ===== EXECUTION =====

    def default_columns(self, dataset: DatasetDefinition) -> List[str]:
        return dataset.attribute_names()[: self.default_column_count]

    def result_columns(self, config: ReportConfiguration, dataset: DatasetDefinition) -> List[str]:
        if config.is_aggregated:
            return AggregationEngine(config.group_by, config.aggregations).columns()
        return list(config.selected_attributes) or self.default_columns(dataset)

    def sort_kind(self, config: ReportConfiguration, dataset: DatasetDefinition) -> ValueKind:
        if config.sort.attribute in config.aggregation_columns():
            return ValueKind.NUMERIC
        attribute = dataset.get_attribute(config.sort.attribute)
        return attribute.value_kind if attribute else ValueKind.TEXT

    def run(self, config: ReportConfiguration, dataset: DatasetDefinition) -> QueryResult:
        """Run the full pipeline and return the result table."""
        self.validate(config, dataset)
        warnings = self.collect_warnings(config, dataset)

        rows = FilterEvaluator(dataset.attributes).apply(dataset.rows, config.filters)
        filtered_row_count = len(rows)
        columns = self.result_columns(config, dataset)

        sort_kind = self.sort_kind(config, dataset)
        if config.is_aggregated:
            rows = AggregationEngine(config.group_by, config.aggregations).aggregate(rows)
            rows = sort_rows(rows, config.sort, sort_kind)
            rows = limit_rows(rows, config.row_limit)
        else:
            # Sort source rows so unselected attributes still order the result
            rows = sort_rows(rows, config.sort, sort_kind)
            rows = project(limit_rows(rows, config.row_limit), columns)

        logger.debug(
            "Report on '%s': %d/%d rows after filters, %d in result",
            dataset.id, filtered_row_count, len(dataset.rows), len(rows),
        )
        return QueryResult(
            table=ResultTable(columns=columns, rows=rows),
            filtered_row_count=filtered_row_count,
            warnings=warnings,
        )
