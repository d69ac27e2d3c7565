"""Dataset catalog: attribute schemas, registry and sample fixtures."""

from .schemas import AttributeDefinition, DataType, DatasetDefinition, ValueKind
from .registry import CatalogRegistry, operators_for

__all__ = [
    "AttributeDefinition",
    "DataType",
    "DatasetDefinition",
    "ValueKind",
    "CatalogRegistry",
    "operators_for",
]
