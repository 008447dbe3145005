"""Holdings report: remaining position per asset."""

from rich.table import Table

from crypto_taxes.engines.ledger import Ledger


class HoldingsReportGenerator:
    """Builds a rich table of open positions from a replayed ledger."""

    def build_table(self, ledger: Ledger) -> Table:
        tbl = Table(title="Account Summary", show_header=True)
        tbl.add_column("Asset")
        tbl.add_column("Quantity", justify="right")
        tbl.add_column("Open Lots", justify="right")
        tbl.add_column("Total Cost", justify="right")
        tbl.add_column("Average Cost", justify="right")

        for asset in ledger.assets:
            queue = ledger[asset]
            tbl.add_row(
                asset,
                str(queue.total_quantity()),
                str(len(queue)),
                f"${queue.total_cost():,.2f}",
                f"${queue.average_cost():,.2f}",
            )
        return tbl
