"""
Test configuration and shared fixtures for the report builder test suite.
Provides an in-memory log store, a small deterministic catalog and a test client.
"""

import os

# Point the log store at in-memory SQLite before the app modules are imported
os.environ["LOG_DATABASE_URL"] = "sqlite://"

import pytest
from typing import List
from fastapi.testclient import TestClient

from report_builder.app import create_app
from report_builder.catalog.registry import CatalogRegistry
from report_builder.catalog.schemas import AttributeDefinition, DataType, DatasetDefinition
from report_builder.core.database import Base, engine
from report_builder.core.dependencies import get_catalog
from report_builder.query.schemas import ReportConfiguration


# ===== DATABASE SETUP =====

@pytest.fixture(autouse=True)
def clean_log_store():
    """Start every test with empty log tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


# ===== SAMPLE DATA FIXTURES =====

@pytest.fixture
def cash_attributes() -> List[AttributeDefinition]:
    return [
        AttributeDefinition(name="valueDate", label="Value Date", type=DataType.DATE),
        AttributeDefinition(name="product", label="Product", type=DataType.STRING),
        AttributeDefinition(name="region", label="Region", type=DataType.STRING),
        AttributeDefinition(name="currency", label="Currency", type=DataType.STRING),
        AttributeDefinition(name="amount", label="Amount", type=DataType.NUMBER),
        AttributeDefinition(name="fee", label="Fee", type=DataType.CURRENCY),
        AttributeDefinition(name="direction", label="Direction", type=DataType.STRING),
    ]


@pytest.fixture
def cash_dataset(cash_attributes) -> DatasetDefinition:
    """Seven deterministic cash movements."""
    rows = [
        {"valueDate": "2024-01-05", "product": "Payments", "region": "NA", "currency": "USD",
         "amount": 10, "fee": 1.5, "direction": "Inflow"},
        {"valueDate": "2024-01-10", "product": "Sweeps", "region": "NA", "currency": "USD",
         "amount": 5, "fee": 0.5, "direction": "Outflow"},
        {"valueDate": "2024-01-15", "product": "Fees", "region": "EU", "currency": "EUR",
         "amount": 7, "fee": 2, "direction": "Inflow"},
        {"valueDate": "2024-02-01", "product": "FX", "region": "APAC", "currency": "SGD",
         "amount": -20, "fee": 3.25, "direction": "Outflow"},
        {"valueDate": "2024-02-10", "product": "Interest", "region": "EU", "currency": "EUR",
         "amount": 100, "fee": 0, "direction": "Inflow"},
        {"valueDate": "not-a-date", "product": "Payments, intl", "region": "NA", "currency": "USD",
         "amount": "n/a", "fee": 1, "direction": "Inflow"},
        {"valueDate": "2024-03-01", "product": "Sweeps", "region": "APAC", "currency": "SGD",
         "direction": "Outflow"},
    ]
    return DatasetDefinition(
        id="cash_movements",
        name="Cash Movements",
        description="Cash inflows/outflows with value date, product, and counterparty.",
        attributes=cash_attributes,
        rows=rows,
    )


@pytest.fixture
def catalog(cash_dataset) -> CatalogRegistry:
    return CatalogRegistry([cash_dataset])


@pytest.fixture
def base_config() -> ReportConfiguration:
    return ReportConfiguration(dataset_id="cash_movements")


# ===== CLIENT =====

@pytest.fixture
def client(catalog):
    """Create FastAPI test client with the deterministic catalog"""
    app = create_app()
    app.dependency_overrides[get_catalog] = lambda: catalog

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def api_headers():
    """Standard API headers for testing"""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
