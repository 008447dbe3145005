"""Typer CLI interface for crypto-taxes."""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from crypto_taxes.engines.ledger import Ledger
from crypto_taxes.engines.replay import ReplayResult, replay
from crypto_taxes.exceptions import CsvImportError, LedgerError
from crypto_taxes.ingestion.coinbase import CoinbaseAdapter
from crypto_taxes.models.enums import CostBasisMethod, OutputFormat
from crypto_taxes.models.ledger import Transaction
from crypto_taxes.normalization.events import TransactionNormalizer
from crypto_taxes.reports.holdings import HoldingsReportGenerator
from crypto_taxes.reports.sales import SalesReportGenerator

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="crypto-taxes",
    help="crypto-taxes: FIFO cost basis for Coinbase transaction histories.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        envvar="CRYPTO_TAXES_VERBOSE",
        help="Turns on debug logging",
    ),
) -> None:
    """crypto-taxes: FIFO cost basis for Coinbase transaction histories."""
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_transactions(file_path: Path) -> list[Transaction]:
    """Import and sort a Coinbase export, exiting with status 1 on failure."""
    adapter = CoinbaseAdapter()
    try:
        result = adapter.parse(file_path)
    except (FileNotFoundError, CsvImportError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    for message in adapter.validate(result):
        logger.warning(message)

    return TransactionNormalizer().normalize(result.transactions)


@app.command()
def sales(
    file: Path = typer.Argument(..., help="Coinbase transaction history CSV export"),
    avg: bool = typer.Option(
        False,
        "--avg",
        envvar="CRYPTO_TAXES_AVG_COST",
        help="Average cost basis (FIFO is default)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        envvar="CRYPTO_TAXES_FORMAT",
        case_sensitive=False,
        help="Output format: text or csv",
    ),
) -> None:
    """Replay a transaction history and print every taxable sale.

    Sales are printed as they are produced. Transactions the ledger
    rejects are reported on stderr and skipped.
    """
    transactions = _load_transactions(file)
    method = CostBasisMethod.AVERAGE if avg else CostBasisMethod.FIFO
    generator = SalesReportGenerator(method)
    ledger = Ledger()

    def _report_rejection(transaction: Transaction, error: LedgerError) -> None:
        typer.echo(generator.render_rejection(transaction), err=True)

    stream = replay(ledger, transactions, on_error=_report_rejection)

    if output_format == OutputFormat.CSV:
        writer = generator.csv_writer(sys.stdout)
        writer.write_header()
        for sale in stream:
            writer.write_sale(sale)
        sys.stdout.flush()
        return

    for sale in stream:
        typer.echo(generator.render_line(sale))

    typer.echo("\n" + ledger.report())


@app.command()
def holdings(
    file: Path = typer.Argument(..., help="Coinbase transaction history CSV export"),
) -> None:
    """Replay a transaction history and show the remaining position per asset."""
    transactions = _load_transactions(file)
    result = ReplayResult(Ledger()).run(transactions)

    console = Console()
    console.print(HoldingsReportGenerator().build_table(result.ledger))
    if result.rejected:
        typer.echo(f"{len(result.rejected)} transaction(s) could not be processed", err=True)


if __name__ == "__main__":
    app()
