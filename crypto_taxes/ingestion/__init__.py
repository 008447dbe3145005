"""Ingestion adapters for importing transaction histories."""

from crypto_taxes.ingestion.base import BaseAdapter, ImportResult, SkippedRow
from crypto_taxes.ingestion.coinbase import CoinbaseAdapter

__all__ = ["BaseAdapter", "CoinbaseAdapter", "ImportResult", "SkippedRow"]
