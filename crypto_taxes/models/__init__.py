"""Data models for crypto-taxes."""

from crypto_taxes.models.enums import Action, CostBasisMethod, HoldingPeriod, OutputFormat
from crypto_taxes.models.ledger import Lot, Sale, Transaction

__all__ = [
    "Action",
    "CostBasisMethod",
    "HoldingPeriod",
    "Lot",
    "OutputFormat",
    "Sale",
    "Transaction",
]
