"""
API tests for the reporting module.
Tests previews, query text, downloads and config import/export.
"""

import csv
import io
import json

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def grouped_config():
    return {
        "dataset_id": "cash_movements",
        "group_by": ["region"],
        "aggregations": [{"attribute": "amount", "function": "sum"}],
        "sort": {"attribute": "sum(amount)", "direction": "DESC"},
    }


class TestReportPreview:
    """Test preview endpoints"""

    def test_preview_grouped_report(self, client: TestClient, api_headers, grouped_config):
        response = client.post("/api/reports/preview", json=grouped_config, headers=api_headers)
        assert response.status_code == 200

        preview = response.json()
        assert preview["columns"] == ["region", "sum(amount)"]
        assert preview["rows"] == [
            {"region": "EU", "sum(amount)": 107},
            {"region": "NA", "sum(amount)": 15},
            {"region": "APAC", "sum(amount)": -20},
        ]
        assert preview["row_count"] == 3
        assert preview["filtered_row_count"] == 7
        assert preview["sql"] == (
            'SELECT region, SUM(amount) AS "sum(amount)" FROM Cash_Movements '
            "GROUP BY region ORDER BY sum(amount) DESC LIMIT 100;"
        )

    def test_preview_with_date_range(self, client: TestClient, api_headers):
        config = {
            "dataset_id": "cash_movements",
            "selected_attributes": ["valueDate", "product"],
            "filters": [{"attribute": "valueDate", "operator": "range", "value": "2024-01-01,2024-01-31"}],
        }
        response = client.post("/api/reports/preview", json=config, headers=api_headers)
        assert response.status_code == 200
        assert [r["product"] for r in response.json()["rows"]] == ["Payments", "Sweeps", "Fees"]

    def test_preview_numeric_filter_value_may_be_a_number(self, client: TestClient, api_headers):
        config = {
            "dataset_id": "cash_movements",
            "selected_attributes": ["amount"],
            "filters": [{"attribute": "amount", "operator": ">=", "value": 10}],
        }
        response = client.post("/api/reports/preview", json=config, headers=api_headers)
        assert response.status_code == 200
        assert response.json()["rows"] == [{"amount": 10}, {"amount": 100}]

    def test_preview_sql(self, client: TestClient, api_headers):
        config = {
            "dataset_id": "cash_movements",
            "filters": [{"attribute": "product", "operator": "contains", "value": "foo"}],
        }
        response = client.post("/api/reports/preview-sql", json=config, headers=api_headers)
        assert response.status_code == 200
        assert response.json() == {
            "sql": "SELECT * FROM Cash_Movements WHERE product LIKE '%foo%' LIMIT 100;"
        }

    def test_preview_unknown_dataset(self, client: TestClient, api_headers):
        response = client.post("/api/reports/preview", json={"dataset_id": "nope"}, headers=api_headers)
        assert response.status_code == 404
        assert "nope" in response.json()["detail"]

    def test_preview_unknown_group_by(self, client: TestClient, api_headers):
        config = {"dataset_id": "cash_movements", "group_by": ["ghost"]}
        response = client.post("/api/reports/preview", json=config, headers=api_headers)
        assert response.status_code == 400
        assert "ghost" in response.json()["detail"]

    def test_preview_invalid_row_limit(self, client: TestClient, api_headers):
        config = {"dataset_id": "cash_movements", "row_limit": 0}
        response = client.post("/api/reports/preview", json=config, headers=api_headers)
        assert response.status_code == 422
        assert response.json()["detail"]

    def test_preview_unknown_aggregation_function(self, client: TestClient, api_headers):
        config = {
            "dataset_id": "cash_movements",
            "aggregations": [{"attribute": "amount", "function": "median"}],
        }
        response = client.post("/api/reports/preview", json=config, headers=api_headers)
        assert response.status_code == 422


class TestReportExports:
    """Test download endpoints"""

    def test_export_csv(self, client: TestClient, api_headers):
        config = {
            "dataset_id": "cash_movements",
            "selected_attributes": ["product", "amount"],
            "filters": [{"attribute": "region", "operator": "=", "value": "NA"}],
        }
        response = client.post("/api/reports/export-csv", json=config, headers=api_headers)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == "attachment; filename=preview-cash_movements.csv"
        assert response.text == 'product,amount\nPayments,10\nSweeps,5\n"Payments, intl",n/a'

        parsed = list(csv.reader(io.StringIO(response.text)))
        assert parsed[3] == ["Payments, intl", "n/a"]

    def test_export_xlsx(self, client: TestClient, api_headers, grouped_config):
        response = client.post("/api/reports/export-xlsx", json=grouped_config, headers=api_headers)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert "preview-cash_movements.xlsx" in response.headers["content-disposition"]
        assert response.content[:2] == b"PK"

    def test_export_csv_unknown_dataset(self, client: TestClient, api_headers):
        response = client.post("/api/reports/export-csv", json={"dataset_id": "nope"}, headers=api_headers)
        assert response.status_code == 404


class TestConfigDocuments:
    """Test config export/import"""

    def test_export_then_import(self, client: TestClient, api_headers, grouped_config):
        exported = client.post("/api/reports/export-config", json=grouped_config, headers=api_headers)
        assert exported.status_code == 200
        assert "report-config-cash_movements.json" in exported.headers["content-disposition"]
        assert json.loads(exported.content)["group_by"] == ["region"]

        imported = client.post(
            "/api/reports/import-config",
            json={"document": exported.text},
            headers=api_headers,
        )
        assert imported.status_code == 200
        body = imported.json()
        assert body["configuration"]["dataset_id"] == "cash_movements"
        assert body["configuration"]["sort"] == {"attribute": "sum(amount)", "direction": "DESC"}
        assert body["warnings"] == []

    def test_export_config_unknown_sort(self, client: TestClient, api_headers):
        config = {"dataset_id": "cash_movements", "sort": {"attribute": "ghost"}}
        response = client.post("/api/reports/export-config", json=config, headers=api_headers)
        assert response.status_code == 400

    def test_import_malformed_document(self, client: TestClient, api_headers):
        response = client.post(
            "/api/reports/import-config", json={"document": "{oops"}, headers=api_headers
        )
        assert response.status_code == 400
        assert "Invalid configuration document" in response.json()["detail"]

    def test_import_empty_document(self, client: TestClient, api_headers):
        response = client.post("/api/reports/import-config", json={"document": "  "}, headers=api_headers)
        assert response.status_code == 422
