"""Pydantic schemas describing datasets and their attributes."""

from typing import Any, Dict, List, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class DataType(str, Enum):
    """Value types an attribute can declare."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    CURRENCY = "currency"

    @property
    def is_numeric(self) -> bool:
        return self in (DataType.NUMBER, DataType.CURRENCY)


class ValueKind(str, Enum):
    """How values of a column compare and accumulate."""

    TEXT = "text"
    NUMERIC = "numeric"


Scalar = Union[str, int, float]
Row = Dict[str, Any]


class AttributeDefinition(BaseModel):
    """A named, typed column of a dataset."""

    name: str
    label: str
    type: DataType

    model_config = ConfigDict(frozen=True)

    @property
    def value_kind(self) -> ValueKind:
        return ValueKind.NUMERIC if self.type.is_numeric else ValueKind.TEXT


class DatasetDefinition(BaseModel):
    """Schema and rows of an in-memory dataset."""

    id: str
    name: str
    description: str = ""
    attributes: List[AttributeDefinition]
    rows: List[Row] = Field(default_factory=list)

    @field_validator("attributes")
    @classmethod
    def validate_attributes(cls, v: List[AttributeDefinition]) -> List[AttributeDefinition]:
        names = [a.name for a in v]
        if len(names) != len(set(names)):
            raise ValueError("Attribute names must be unique within a dataset")
        return v

    def attribute_names(self) -> List[str]:
        return [a.name for a in self.attributes]

    def get_attribute(self, name: str):
        """Return the attribute called ``name`` or None."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None


# ===== API SCHEMAS =====


class AttributeRead(AttributeDefinition):
    """Attribute with the filter operators offered for its type."""

    operators: List[str] = []


class DatasetSummary(BaseModel):
    id: str
    name: str
    description: str
    attribute_count: int
    row_count: int


class DatasetRead(BaseModel):
    id: str
    name: str
    description: str
    attributes: List[AttributeRead]
    row_count: int
