"""
Unit tests for the dataset catalog and the sample data generator.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from report_builder.catalog.registry import CatalogRegistry, operators_for
from report_builder.catalog.samples import SampleDataGenerator, build_sample_catalog
from report_builder.catalog.schemas import AttributeDefinition, DataType, DatasetDefinition
from report_builder.core.exceptions import DatasetNotFoundError

REFERENCE_DATE = date(2024, 6, 30)


class TestOperators:

    def test_numeric_types_share_operators(self):
        assert operators_for(DataType.NUMBER) == [">", ">=", "<", "<=", "=", "!=", "between"]
        assert operators_for(DataType.CURRENCY) == operators_for(DataType.NUMBER)

    def test_date_and_string_operators(self):
        assert operators_for(DataType.DATE) == ["on", "before", "after", "range"]
        assert operators_for(DataType.STRING) == ["contains", "=", "!=", "startsWith", "endsWith"]

    def test_returned_lists_are_copies(self):
        operators_for(DataType.DATE).append("sometime")
        assert "sometime" not in operators_for(DataType.DATE)


class TestRegistry:

    def test_empty_registry(self):
        registry = CatalogRegistry()
        assert registry.list_datasets() == []
        assert registry.search_datasets("cash") == []

    def test_get_unknown_dataset(self, catalog):
        with pytest.raises(DatasetNotFoundError) as exc_info:
            catalog.get("nope")
        assert exc_info.value.dataset_id == "nope"
        assert "Dataset 'nope' not found" in str(exc_info.value)

    def test_search_datasets(self, catalog):
        assert [d.id for d in catalog.search_datasets("INFLOWS")] == ["cash_movements"]
        assert catalog.search_datasets("ledger") == []
        assert len(catalog.search_datasets("")) == 1

    def test_search_attributes_by_name_or_label(self, catalog):
        assert [a.name for a in catalog.search_attributes("cash_movements", "date")] == ["valueDate"]
        assert [a.name for a in catalog.search_attributes("cash_movements", "FEE")] == ["fee"]
        assert len(catalog.search_attributes("cash_movements")) == 7

    def test_numeric_split(self, catalog):
        assert [a.name for a in catalog.numeric_attributes("cash_movements")] == ["amount", "fee"]
        assert "amount" not in [a.name for a in catalog.non_numeric_attributes("cash_movements")]

    def test_register_replaces_by_id(self, catalog, cash_attributes):
        catalog.register(DatasetDefinition(id="cash_movements", name="Other", attributes=cash_attributes))
        assert catalog.get("cash_movements").name == "Other"
        assert len(catalog.list_datasets()) == 1

    def test_read_models(self, catalog, cash_dataset):
        summary = CatalogRegistry.to_summary(cash_dataset)
        assert summary.attribute_count == 7
        assert summary.row_count == 7

        read = catalog.to_read(cash_dataset)
        fee = next(a for a in read.attributes if a.name == "fee")
        assert fee.operators == operators_for(DataType.CURRENCY)

    def test_duplicate_attribute_names_rejected(self):
        attribute = AttributeDefinition(name="a", label="A", type=DataType.STRING)
        with pytest.raises(ValidationError):
            DatasetDefinition(id="x", name="X", attributes=[attribute, attribute])


class TestSampleData:

    def test_catalog_contents(self):
        catalog = build_sample_catalog(seed=1, reference_date=REFERENCE_DATE)
        counts = {d.id: len(d.rows) for d in catalog.list_datasets()}
        assert counts == {"gl_balances": 200, "cash_movements": 200, "trades": 220}

    def test_same_seed_same_rows(self):
        first = SampleDataGenerator(7, REFERENCE_DATE).generate()
        second = SampleDataGenerator(7, REFERENCE_DATE).generate()
        assert [d.rows for d in first] == [d.rows for d in second]

    def test_different_seed_different_rows(self):
        first = SampleDataGenerator(1, REFERENCE_DATE).cash_movements()
        second = SampleDataGenerator(2, REFERENCE_DATE).cash_movements()
        assert first.rows != second.rows

    def test_rows_match_declared_schema(self):
        for dataset in SampleDataGenerator(3, REFERENCE_DATE).generate():
            names = set(dataset.attribute_names())
            assert all(set(row) == names for row in dataset.rows)

    def test_dates_fall_within_window(self):
        dataset = SampleDataGenerator(5, REFERENCE_DATE).trades()
        dates = {date.fromisoformat(row["tradeDate"]) for row in dataset.rows}
        assert max(dates) <= REFERENCE_DATE
        assert (REFERENCE_DATE - min(dates)).days < 10

    def test_notional_is_quantity_times_price(self):
        for row in SampleDataGenerator(9, REFERENCE_DATE).trades(count=20).rows:
            assert row["notional"] == round(row["qty"] * row["price"], 2)
