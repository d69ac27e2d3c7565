"""In-memory dataset catalog used by the report builder."""

from typing import Dict, List, Optional

from report_builder.catalog.schemas import (
    AttributeDefinition,
    AttributeRead,
    DataType,
    DatasetDefinition,
    DatasetRead,
    DatasetSummary,
)
from report_builder.core.exceptions import DatasetNotFoundError


# Filter operators offered to the user for each attribute type
NUMERIC_OPERATORS: List[str] = [">", ">=", "<", "<=", "=", "!=", "between"]
DATE_OPERATORS: List[str] = ["on", "before", "after", "range"]
STRING_OPERATORS: List[str] = ["contains", "=", "!=", "startsWith", "endsWith"]


def operators_for(data_type: DataType) -> List[str]:
    """Get the filter operators offered for an attribute type."""
    if data_type.is_numeric:
        return list(NUMERIC_OPERATORS)
    if data_type == DataType.DATE:
        return list(DATE_OPERATORS)
    return list(STRING_OPERATORS)


class CatalogRegistry:
    """Registry of datasets available for ad-hoc reporting."""

    def __init__(self, datasets: Optional[List[DatasetDefinition]] = None):
        self._datasets: Dict[str, DatasetDefinition] = {}
        for dataset in datasets or []:
            self.register(dataset)

    def register(self, dataset: DatasetDefinition) -> None:
        """Register (or replace) a dataset."""
        self._datasets[dataset.id] = dataset

    def get(self, dataset_id: str) -> DatasetDefinition:
        dataset = self._datasets.get(dataset_id)
        if dataset is None:
            raise DatasetNotFoundError(dataset_id)
        return dataset

    def list_datasets(self) -> List[DatasetDefinition]:
        return list(self._datasets.values())

    def search_datasets(self, search: str = "") -> List[DatasetDefinition]:
        """Case-insensitive match on dataset name or description."""
        if not search:
            return self.list_datasets()
        term = search.lower()
        return [
            d for d in self._datasets.values()
            if term in d.name.lower() or term in d.description.lower()
        ]

    def search_attributes(self, dataset_id: str, search: str = "") -> List[AttributeDefinition]:
        """Case-insensitive match on attribute name or label."""
        attributes = self.get(dataset_id).attributes
        if not search:
            return list(attributes)
        term = search.lower()
        return [
            a for a in attributes
            if term in a.name.lower() or term in a.label.lower()
        ]

    def numeric_attributes(self, dataset_id: str) -> List[AttributeDefinition]:
        return [a for a in self.get(dataset_id).attributes if a.type.is_numeric]

    def non_numeric_attributes(self, dataset_id: str) -> List[AttributeDefinition]:
        return [a for a in self.get(dataset_id).attributes if not a.type.is_numeric]

    # ===== API CONVERSIONS =====

    @staticmethod
    def to_attribute_read(attribute: AttributeDefinition) -> AttributeRead:
        return AttributeRead(
            name=attribute.name,
            label=attribute.label,
            type=attribute.type,
            operators=operators_for(attribute.type),
        )

    @staticmethod
    def to_summary(dataset: DatasetDefinition) -> DatasetSummary:
        return DatasetSummary(
            id=dataset.id,
            name=dataset.name,
            description=dataset.description,
            attribute_count=len(dataset.attributes),
            row_count=len(dataset.rows),
        )

    def to_read(self, dataset: DatasetDefinition) -> DatasetRead:
        return DatasetRead(
            id=dataset.id,
            name=dataset.name,
            description=dataset.description,
            attributes=[self.to_attribute_read(a) for a in dataset.attributes],
            row_count=len(dataset.rows),
        )
