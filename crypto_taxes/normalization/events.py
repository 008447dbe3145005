"""Transaction normalization before replay."""

from crypto_taxes.models.ledger import Transaction


class TransactionNormalizer:
    """Puts imported transactions into the order the ledger requires."""

    def normalize(self, raw_transactions: list[Transaction]) -> list[Transaction]:
        """Return the transactions sorted by timestamp, oldest first.

        The sort is stable, so transactions sharing a timestamp keep their
        file order.
        """
        return sorted(raw_transactions, key=lambda transaction: transaction.timestamp)
