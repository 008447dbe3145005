"""Sale report generator: one line (or CSV row) per taxable sale."""

import csv
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import TextIO

from jinja2 import Environment, FileSystemLoader

from crypto_taxes.models.enums import CostBasisMethod
from crypto_taxes.models.ledger import Sale, Transaction

TEMPLATE_DIR = Path(__file__).parent / "templates"

CSV_FIELDS = [
    "sale_date",
    "purchase_date",
    "asset",
    "quantity",
    "proceeds",
    "fifo_cost",
    "avg_cost",
    "cost_basis",
    "gain_loss",
    "holding_period",
]

_CENTS = Decimal("0.01")


def _round_cents(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


class SalesReportGenerator:
    """Renders sales using the FIFO or average cost figure for P&L."""

    def __init__(self, method: CostBasisMethod = CostBasisMethod.FIFO) -> None:
        self.method = method
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))

    def render_line(self, sale: Sale) -> str:
        """Render a single sale as a human-readable line."""
        template = self.env.get_template("sale_line.txt")
        return template.render(sale=sale, gain_loss=_round_cents(sale.gain_loss(self.method)))

    def render_text(self, sales: Iterable[Sale]) -> str:
        return "\n".join(self.render_line(sale) for sale in sales)

    def render_rejection(self, transaction: Transaction) -> str:
        """Render the notice for a transaction the ledger rejected."""
        template = self.env.get_template("rejection.txt")
        return template.render(transaction=transaction)

    def csv_writer(self, stream: TextIO) -> "SalesCsvWriter":
        return SalesCsvWriter(stream, self.method)

    def write_csv(self, sales: Iterable[Sale], stream: TextIO) -> int:
        """Write a header and one row per sale. Returns the row count."""
        writer = self.csv_writer(stream)
        writer.write_header()
        count = 0
        for sale in sales:
            writer.write_sale(sale)
            count += 1
        return count


class SalesCsvWriter:
    """Incremental CSV output so rows can be written as sales stream in."""

    def __init__(self, stream: TextIO, method: CostBasisMethod) -> None:
        self.method = method
        self._writer = csv.DictWriter(stream, fieldnames=CSV_FIELDS, lineterminator="\n")

    def write_header(self) -> None:
        self._writer.writeheader()

    def write_sale(self, sale: Sale) -> None:
        self._writer.writerow(
            {
                "sale_date": sale.sale_date.date().isoformat(),
                "purchase_date": sale.purchase_date.date().isoformat(),
                "asset": sale.asset,
                "quantity": str(sale.quantity),
                "proceeds": str(sale.proceeds),
                "fifo_cost": str(sale.fifo_cost),
                "avg_cost": str(sale.avg_cost),
                "cost_basis": str(sale.cost(self.method)),
                "gain_loss": str(_round_cents(sale.gain_loss(self.method))),
                "holding_period": sale.holding_period.value,
            }
        )
