# report_builder/core/dependencies.py
"""Shared FastAPI dependencies"""

from functools import lru_cache
from typing import Annotated
from fastapi import Depends
from sqlalchemy.orm import Session

from report_builder.catalog.registry import CatalogRegistry
from report_builder.catalog.samples import build_sample_catalog
from report_builder.core.config import SAMPLE_DATA_SEED
from report_builder.core.database import get_db


@lru_cache(maxsize=1)
def get_catalog() -> CatalogRegistry:
    """Get the process-wide dataset catalog (seeded once)."""
    return build_sample_catalog(seed=SAMPLE_DATA_SEED)


# Core dependencies
SessionDep = Annotated[Session, Depends(get_db)]
CatalogDep = Annotated[CatalogRegistry, Depends(get_catalog)]
