"""Normalization layer for imported transactions."""

from crypto_taxes.normalization.events import TransactionNormalizer

__all__ = ["TransactionNormalizer"]
