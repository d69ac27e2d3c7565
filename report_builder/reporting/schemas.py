"""Pydantic schemas for the reporting API."""

from typing import Any, Dict, List
from dataclasses import dataclass
from pydantic import BaseModel, ConfigDict, field_validator

from report_builder.query.schemas import ReportConfiguration


class ReportPreview(BaseModel):
    """Result table plus the query text for one configuration."""

    dataset_id: str
    columns: List[str]
    rows: List[Dict[str, Any]]
    sql: str
    row_count: int
    filtered_row_count: int
    warnings: List[str] = []


class QueryTextResponse(BaseModel):
    sql: str


class ConfigImportRequest(BaseModel):
    """A previously exported configuration document."""

    document: str

    model_config = ConfigDict(extra="forbid")

    @field_validator("document")
    @classmethod
    def validate_document(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Configuration document cannot be empty")
        return v


class ConfigImportResponse(BaseModel):
    configuration: ReportConfiguration
    warnings: List[str] = []


@dataclass
class ExportArtifact:
    """Payload handed to the download layer."""

    filename: str
    content: bytes
    media_type: str
