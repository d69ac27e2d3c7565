"""API router for browsing the dataset catalog."""

from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query

from report_builder.catalog.schemas import AttributeRead, DatasetRead, DatasetSummary
from report_builder.core.dependencies import CatalogDep
from report_builder.core.exceptions import DatasetNotFoundError

router = APIRouter(prefix="/datasets", tags=["catalog"])


@router.get("/", response_model=List[DatasetSummary])
def get_datasets(
    catalog: CatalogDep,
    search: Optional[str] = Query(None, description="Match on dataset name or description"),
) -> List[DatasetSummary]:
    """List datasets, optionally filtered by a search term."""
    return [catalog.to_summary(d) for d in catalog.search_datasets(search or "")]


@router.get("/{dataset_id}", response_model=DatasetRead)
def get_dataset(dataset_id: str, catalog: CatalogDep) -> DatasetRead:
    """Get a dataset's schema with the operators offered per attribute."""
    try:
        return catalog.to_read(catalog.get(dataset_id))
    except DatasetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{dataset_id}/attributes", response_model=List[AttributeRead])
def get_dataset_attributes(
    dataset_id: str,
    catalog: CatalogDep,
    search: Optional[str] = Query(None, description="Match on attribute name or label"),
) -> List[AttributeRead]:
    """Search a dataset's attributes."""
    try:
        attributes = catalog.search_attributes(dataset_id, search or "")
    except DatasetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [catalog.to_attribute_read(a) for a in attributes]
