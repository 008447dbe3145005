"""Tests for sale report rendering."""

import csv
import io
from datetime import datetime, timezone
from decimal import Decimal

from crypto_taxes.engines.lot_queue import LotQueue
from crypto_taxes.models.enums import Action, CostBasisMethod
from crypto_taxes.models.ledger import Sale, Transaction
from crypto_taxes.reports.sales import CSV_FIELDS, SalesReportGenerator


def _utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def _make_transaction(when: datetime, action: Action, asset: str, quantity: str, unit_price: str) -> Transaction:
    return Transaction(
        timestamp=when, action=action, asset=asset, quantity=Decimal(quantity), unit_price=Decimal(unit_price)
    )


def _sales(queue: LotQueue) -> list[Sale]:
    return list(queue.sell(Decimal("200"), Decimal("3"), _utc(2021, 2, 1)))


class TestRenderText:
    def test_fifo_line(self, two_lot_queue: LotQueue):
        sale = _sales(two_lot_queue)[0]
        line = SalesReportGenerator().render_line(sale)
        assert line == "2021-02-01: Sold 100 of BTC with P&L of $500.00 purchased on 2020-01-01"

    def test_average_cost_line(self, two_lot_queue: LotQueue):
        sale = _sales(two_lot_queue)[0]
        line = SalesReportGenerator(CostBasisMethod.AVERAGE).render_line(sale)
        assert line == "2021-02-01: Sold 100 of BTC with P&L of $450.00 purchased on 2020-01-01"

    def test_pnl_rounds_to_cents(self):
        sale = Sale(
            asset="ETH",
            sale_date=_utc(2021, 5, 1),
            purchase_date=_utc(2021, 1, 1),
            quantity=Decimal("0.3"),
            fifo_cost=Decimal("333.333"),
            avg_cost=Decimal("333.333"),
            proceeds=Decimal("1000"),
        )
        assert "P&L of $666.67 " in SalesReportGenerator().render_line(sale)

    def test_render_text_joins_lines(self, two_lot_queue: LotQueue):
        text = SalesReportGenerator().render_text(_sales(two_lot_queue))
        lines = text.splitlines()
        assert len(lines) == 2
        assert lines[1] == "2021-02-01: Sold 300 of BTC with P&L of $400.00 purchased on 2021-01-01"

    def test_rejection(self):
        transaction = _make_transaction(_utc(2021, 3, 1), Action.SELL, "ETH", "5", "1500")
        notice = SalesReportGenerator().render_rejection(transaction)
        assert notice == "Error processing 2021-03-01 sell of 5 ETH"


class TestWriteCsv:
    def test_rows(self, two_lot_queue: LotQueue):
        stream = io.StringIO()
        count = SalesReportGenerator().write_csv(_sales(two_lot_queue), stream)

        assert count == 2
        stream.seek(0)
        reader = csv.DictReader(stream)
        assert reader.fieldnames == CSV_FIELDS
        rows = list(reader)
        assert rows[0]["sale_date"] == "2021-02-01"
        assert rows[0]["purchase_date"] == "2020-01-01"
        assert rows[0]["cost_basis"] == "100"
        assert rows[0]["gain_loss"] == "500.00"
        assert rows[0]["holding_period"] == "LONG_TERM"
        assert rows[1]["holding_period"] == "SHORT_TERM"

    def test_average_cost_basis_column(self, two_lot_queue: LotQueue):
        stream = io.StringIO()
        SalesReportGenerator(CostBasisMethod.AVERAGE).write_csv(_sales(two_lot_queue), stream)
        stream.seek(0)
        rows = list(csv.DictReader(stream))
        assert Decimal(rows[0]["cost_basis"]) == Decimal("150")
        assert rows[0]["gain_loss"] == "450.00"

    def test_header_only_when_no_sales(self):
        stream = io.StringIO()
        assert SalesReportGenerator().write_csv([], stream) == 0
        assert stream.getvalue() == ",".join(CSV_FIELDS) + "\n"
