"""Report generation for crypto-taxes."""

from crypto_taxes.reports.holdings import HoldingsReportGenerator
from crypto_taxes.reports.sales import SalesCsvWriter, SalesReportGenerator

__all__ = [
    "HoldingsReportGenerator",
    "SalesCsvWriter",
    "SalesReportGenerator",
]
