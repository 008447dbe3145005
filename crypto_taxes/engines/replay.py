"""Replay driver: stream sales out of a ledger, skipping failed transactions."""

import logging
from collections.abc import Callable, Iterable, Iterator

from crypto_taxes.engines.ledger import Ledger
from crypto_taxes.exceptions import LedgerError
from crypto_taxes.models.ledger import Sale, Transaction

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[Transaction, LedgerError], None]


def replay(
    ledger: Ledger,
    transactions: Iterable[Transaction],
    on_error: ErrorCallback | None = None,
) -> Iterator[Sale]:
    """Replay transactions in order, yielding each sale as it is produced.

    A transaction that raises a :class:`LedgerError` is logged, passed to
    ``on_error`` and skipped; replay continues with the next one. Sales a
    failing sell yielded before its error are still delivered.

    Args:
        ledger: The ledger to mutate. Transactions must already be sorted.
        transactions: Transactions in non-decreasing timestamp order.
        on_error: Called with the failing transaction and its error.
    """
    for transaction in transactions:
        try:
            yield from ledger.process(transaction)
        except LedgerError as exc:
            logger.debug(
                "Skipping %s %s %s on %s: %s",
                transaction.action.value,
                transaction.quantity,
                transaction.asset,
                transaction.timestamp.date(),
                exc,
            )
            if on_error is not None:
                on_error(transaction, exc)


class ReplayResult:
    """Collects the outcome of a full, non-streaming replay."""

    def __init__(self, ledger: Ledger) -> None:
        self.ledger = ledger
        self.sales: list[Sale] = []
        self.rejected: list[tuple[Transaction, LedgerError]] = []

    def _reject(self, transaction: Transaction, error: LedgerError) -> None:
        self.rejected.append((transaction, error))

    def run(self, transactions: Iterable[Transaction]) -> "ReplayResult":
        self.sales.extend(replay(self.ledger, transactions, on_error=self._reject))
        return self
