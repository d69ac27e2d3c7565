"""Sample dataset generator for the report builder catalog.

The generator is a fixture: it owns all randomness and the reference date, so
the query pipeline itself never depends on either.
"""

import random
from datetime import date, timedelta
from typing import List, Optional

from report_builder.catalog.schemas import AttributeDefinition, DataType, DatasetDefinition
from report_builder.catalog.registry import CatalogRegistry


def _attr(name: str, label: str, data_type: DataType) -> AttributeDefinition:
    return AttributeDefinition(name=name, label=label, type=data_type)


# ===== CATALOG SCHEMAS (rows are seeded at runtime) =====

GL_BALANCES_ATTRIBUTES = [
    _attr("ledgerDate", "Ledger Date", DataType.DATE),
    _attr("legalEntity", "Legal Entity", DataType.STRING),
    _attr("glAccount", "GL Account", DataType.STRING),
    _attr("assetType", "Asset Type", DataType.STRING),
    _attr("currency", "Currency", DataType.STRING),
    _attr("balance", "Balance", DataType.NUMBER),
    _attr("netChange", "Net Change", DataType.NUMBER),
]

CASH_MOVEMENTS_ATTRIBUTES = [
    _attr("valueDate", "Value Date", DataType.DATE),
    _attr("product", "Product", DataType.STRING),
    _attr("counterparty", "Counterparty", DataType.STRING),
    _attr("region", "Region", DataType.STRING),
    _attr("currency", "Currency", DataType.STRING),
    _attr("amount", "Amount", DataType.NUMBER),
    _attr("direction", "Direction", DataType.STRING),
]

TRADES_ATTRIBUTES = [
    _attr("tradeDate", "Trade Date", DataType.DATE),
    _attr("instrument", "Instrument", DataType.STRING),
    _attr("desk", "Desk", DataType.STRING),
    _attr("trader", "Trader", DataType.STRING),
    _attr("qty", "Quantity", DataType.NUMBER),
    _attr("price", "Price", DataType.NUMBER),
    _attr("notional", "Notional", DataType.NUMBER),
    _attr("currency", "Currency", DataType.STRING),
]

CURRENCIES = ["USD", "EUR", "GBP", "INR", "SGD"]


class SampleDataGenerator:
    """Seeds the three demo datasets with reproducible rows."""

    def __init__(self, seed: int = 42, reference_date: Optional[date] = None):
        self.rng = random.Random(seed)
        self.reference_date = reference_date or date.today()

    def _date(self, max_offset_days: int) -> str:
        offset = self.rng.randrange(max_offset_days)
        return (self.reference_date - timedelta(days=offset)).isoformat()

    def _amount(self, spread: float) -> float:
        return round(self.rng.random() * spread - spread / 2, 2)

    def gl_balances(self, count: int = 200) -> DatasetDefinition:
        entities = ["JPMC UK", "JPMC US", "JPMC SG", "JPMC IN"]
        accounts = ["100100 ASSETS", "200200 LIAB", "300300 EQUITY", "400400 REV"]
        assets = ["Cash", "Loans", "Securities", "Derivatives"]
        rows = [
            {
                "ledgerDate": self._date(20),
                "legalEntity": self.rng.choice(entities),
                "glAccount": self.rng.choice(accounts),
                "assetType": self.rng.choice(assets),
                "currency": self.rng.choice(CURRENCIES),
                "balance": self._amount(1_000_000),
                "netChange": self._amount(100_000),
            }
            for _ in range(count)
        ]
        return DatasetDefinition(
            id="gl_balances",
            name="GL Balances",
            description="General Ledger end-of-day balances by legal entity, account, and currency.",
            attributes=GL_BALANCES_ATTRIBUTES,
            rows=rows,
        )

    def cash_movements(self, count: int = 200) -> DatasetDefinition:
        products = ["Payments", "Sweeps", "Fees", "Interest", "FX"]
        regions = ["NA", "EMEA", "APAC", "LATAM"]
        counterparties = ["ACME Bank", "Globex", "Initech", "Umbrella", "Soylent"]
        directions = ["Inflow", "Outflow"]
        rows = [
            {
                "valueDate": self._date(15),
                "product": self.rng.choice(products),
                "counterparty": self.rng.choice(counterparties),
                "region": self.rng.choice(regions),
                "currency": self.rng.choice(CURRENCIES),
                "amount": self._amount(250_000),
                "direction": self.rng.choice(directions),
            }
            for _ in range(count)
        ]
        return DatasetDefinition(
            id="cash_movements",
            name="Cash Movements",
            description="Cash inflows/outflows with value date, product, and counterparty.",
            attributes=CASH_MOVEMENTS_ATTRIBUTES,
            rows=rows,
        )

    def trades(self, count: int = 220) -> DatasetDefinition:
        instruments = ["AAPL", "GOOG", "TSLA", "INFY", "TCS", "MSFT", "AMZN"]
        desks = ["EQ-Delta", "EQ-Algo", "FI-Rates", "FI-Credit"]
        traders = ["R. Patel", "M. Khan", "S. Chen", "L. Garcia", "A. Singh"]
        rows = []
        for _ in range(count):
            price = round(50 + self.rng.random() * 150, 2)
            qty = self.rng.randrange(10, 510) * (1 if self.rng.random() > 0.5 else -1)
            rows.append({
                "tradeDate": self._date(10),
                "instrument": self.rng.choice(instruments),
                "desk": self.rng.choice(desks),
                "trader": self.rng.choice(traders),
                "qty": qty,
                "price": price,
                "notional": round(qty * price, 2),
                "currency": self.rng.choice(CURRENCIES),
            })
        return DatasetDefinition(
            id="trades",
            name="Trades (Securities)",
            description="Executed trades with instrument, desk, trader and notional/price.",
            attributes=TRADES_ATTRIBUTES,
            rows=rows,
        )

    def generate(self) -> List[DatasetDefinition]:
        return [self.gl_balances(), self.cash_movements(), self.trades()]


def build_sample_catalog(seed: int = 42, reference_date: Optional[date] = None) -> CatalogRegistry:
    """Build a catalog registry seeded with the demo datasets."""
    return CatalogRegistry(SampleDataGenerator(seed, reference_date).generate())
