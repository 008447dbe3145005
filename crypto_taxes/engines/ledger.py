"""Account ledger: one lot queue per asset."""

import logging
from collections.abc import Iterator
from decimal import Decimal

from crypto_taxes.engines.lot_queue import LotQueue
from crypto_taxes.models.enums import Action
from crypto_taxes.models.ledger import Sale, Transaction

logger = logging.getLogger(__name__)

REPORT_HEADER = "Account Summary"


class Ledger:
    """Holds a :class:`LotQueue` per asset and replays transactions into them."""

    def __init__(self) -> None:
        self._holdings: dict[str, LotQueue] = {}

    def __contains__(self, asset: str) -> bool:
        return asset in self._holdings

    def __getitem__(self, asset: str) -> LotQueue:
        return self._holdings[asset]

    @property
    def assets(self) -> list[str]:
        return list(self._holdings)

    def _queue_for(self, asset: str) -> LotQueue:
        queue = self._holdings.get(asset)
        if queue is None:
            queue = LotQueue(asset)
            self._holdings[asset] = queue
            logger.debug("Opened lot queue for %s", asset)
        return queue

    def process(self, transaction: Transaction) -> Iterator[Sale]:
        """Replay a transaction against the ledger.

        Buys are applied immediately and return an empty iterator. Sells
        return the lot queue's lazy iterator of sales. Errors from the lot
        queue propagate unchanged.
        """
        queue = self._queue_for(transaction.asset)

        if transaction.action == Action.BUY:
            queue.buy(transaction.to_lot())
            return iter(())

        return queue.sell(transaction.quantity, transaction.unit_price, transaction.timestamp)

    def holdings(self) -> dict[str, Decimal]:
        """Remaining quantity per asset, in the order assets were first seen."""
        return {asset: queue.total_quantity() for asset, queue in self._holdings.items()}

    def report(self) -> str:
        """Return a plain-text account summary."""
        rule = "-" * len(REPORT_HEADER)
        lines = [rule, REPORT_HEADER, rule]
        lines.extend(f"{asset}: {quantity}" for asset, quantity in self.holdings().items())
        return "\n".join(lines) + "\n"
