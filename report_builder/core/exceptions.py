# report_builder/core/exceptions.py
"""Domain errors raised by the report pipeline and the catalog."""

from typing import List, Optional


class ReportConfigurationError(ValueError):
    """A report configuration references attributes the dataset does not have."""

    def __init__(self, message: str, attributes: Optional[List[str]] = None):
        super().__init__(message)
        self.attributes = attributes or []


class DatasetNotFoundError(LookupError):
    """Raised when a dataset id is not registered in the catalog."""

    def __init__(self, dataset_id: str):
        super().__init__(f"Dataset '{dataset_id}' not found")
        self.dataset_id = dataset_id
