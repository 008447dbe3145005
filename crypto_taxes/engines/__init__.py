"""Lot accounting engines."""

from crypto_taxes.engines.ledger import Ledger
from crypto_taxes.engines.lot_queue import LotQueue
from crypto_taxes.engines.replay import ReplayResult, replay

__all__ = [
    "Ledger",
    "LotQueue",
    "ReplayResult",
    "replay",
]
