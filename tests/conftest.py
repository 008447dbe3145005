"""Shared test fixtures for crypto-taxes."""

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from crypto_taxes.engines.lot_queue import LotQueue
from crypto_taxes.ingestion.coinbase import EXPECTED_HEADERS
from crypto_taxes.models.enums import Action
from crypto_taxes.models.ledger import Lot, Transaction

_COINBASE_PREAMBLE = [
    "You can use this transaction report to inform your likely tax obligations.",
    "For US customers, Sells, Converts, and Rewards Income, and Coinbase Earn transactions are taxable events.",
    "For final tax obligations, please consult your tax advisor.",
    "",
    "",
    "Transactions",
    "User,jane@example.com,5f1e0c2a9b",
]


def _utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def _make_transaction(
    when: datetime,
    action: Action,
    asset: str,
    quantity: str,
    unit_price: str,
) -> Transaction:
    return Transaction(
        timestamp=when,
        action=action,
        asset=asset,
        quantity=Decimal(quantity),
        unit_price=Decimal(unit_price),
    )


def _coinbase_row(timestamp: str, tx_type: str, asset: str, quantity: str, spot: str, notes: str = "") -> str:
    subtotal = Decimal(quantity) * Decimal(spot)
    return f'{timestamp},{tx_type},{asset},{quantity},{spot},{subtotal},{subtotal},0.00,"{notes}"'


@pytest.fixture
def two_lot_queue() -> LotQueue:
    """BTC queue holding 100 @ $1 (2020-01-01) then 100 @ $2 (2021-01-01)."""
    queue = LotQueue("BTC")
    queue.buy(Lot(purchase_date=_utc(2020, 1, 1), quantity=Decimal("100"), unit_price=Decimal("1")))
    queue.buy(Lot(purchase_date=_utc(2021, 1, 1), quantity=Decimal("100"), unit_price=Decimal("2")))
    return queue


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    return [
        _make_transaction(_utc(2020, 1, 1), Action.BUY, "BTC", "100", "1"),
        _make_transaction(_utc(2021, 1, 1), Action.BUY, "BTC", "100", "2"),
        _make_transaction(_utc(2021, 2, 1), Action.SELL, "BTC", "200", "3"),
    ]


@pytest.fixture
def write_coinbase_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write a Coinbase-style export with the given data rows."""

    def _write(
        rows: list[str], headers: list[str] | None = None, name: str = "coinbase.csv", encoding: str = "utf-8"
    ) -> Path:
        header = ",".join(headers if headers is not None else EXPECTED_HEADERS)
        path = tmp_path / name
        path.write_text("\n".join(_COINBASE_PREAMBLE + [header] + rows) + "\n", encoding=encoding)
        return path

    return _write


@pytest.fixture
def sample_csv_rows() -> list[str]:
    return [
        _coinbase_row("2020-01-01T12:00:00Z", "Buy", "BTC", "100", "1", "Bought 100 BTC"),
        _coinbase_row("2021-01-01T12:00:00Z", "Buy", "BTC", "100", "2", "Bought 100 BTC"),
        _coinbase_row("2021-02-01T12:00:00Z", "Sell", "BTC", "200", "3", "Sold 200 BTC"),
    ]
