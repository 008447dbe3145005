"""Per-asset FIFO lot queue."""

import logging
from collections import deque
from collections.abc import Iterator
from datetime import datetime
from decimal import Decimal

from crypto_taxes.exceptions import (
    InsufficientLotsError,
    InvalidPriceError,
    InvalidQuantityError,
    OutOfOrderError,
)
from crypto_taxes.models.ledger import Lot, Sale

logger = logging.getLogger(__name__)


class LotQueue:
    """Open lots of a single asset, consumed oldest-first on sells.

    Lots are kept in purchase order. Buys must arrive in non-decreasing
    date order; the queue never reorders what it has been given.
    """

    def __init__(self, asset: str) -> None:
        self.asset = asset
        self._lots: deque[Lot] = deque()

    def __len__(self) -> int:
        return len(self._lots)

    @property
    def lots(self) -> tuple[Lot, ...]:
        """Snapshot of the open lots, oldest first."""
        return tuple(self._lots)

    @property
    def tail(self) -> Lot | None:
        if not self._lots:
            return None
        return self._lots[-1]

    def _peek(self) -> Lot | None:
        if not self._lots:
            return None
        return self._lots[0]

    def _validate(self, quantity: Decimal, unit_price: Decimal) -> None:
        if quantity <= 0:
            raise InvalidQuantityError(self.asset, quantity)
        if unit_price <= 0:
            raise InvalidPriceError(self.asset, unit_price)

    def buy(self, lot: Lot) -> None:
        """Append a lot to the tail of the queue.

        Raises:
            InvalidQuantityError: If the lot quantity is not positive.
            InvalidPriceError: If the lot unit price is not positive.
            OutOfOrderError: If the lot predates the most recent buy.
        """
        self._validate(lot.quantity, lot.unit_price)
        tail = self.tail
        if tail is not None and lot.purchase_date < tail.purchase_date:
            raise OutOfOrderError(self.asset, lot.purchase_date, tail.purchase_date)

        self._lots.append(lot)
        logger.debug("BUY %s %s @ %s on %s", lot.quantity, self.asset, lot.unit_price, lot.purchase_date)

    def sell(self, quantity: Decimal, unit_price: Decimal, sale_date: datetime) -> Iterator[Sale]:
        """Sell units from the head of the queue.

        Arguments are validated immediately. The returned iterator performs
        the consumption lazily and yields one :class:`Sale` per lot touched;
        it must be drained for the sell to take effect.

        Two legacy behaviours are preserved: a fully consumed lot
        reduces the outstanding amount by its total cost rather than its
        quantity, and each Sale reports ``quantity`` as the sell quantity
        minus what is still outstanding after that lot.

        Raises:
            InvalidQuantityError: If ``quantity`` is not positive.
            InvalidPriceError: If ``unit_price`` is not positive.
            InsufficientLotsError: While iterating, if the queue runs out of
                lots before the sell is covered. Sales already yielded stay
                valid.
        """
        self._validate(quantity, unit_price)
        return self._consume(quantity, unit_price, sale_date)

    def _consume(self, quantity: Decimal, unit_price: Decimal, sale_date: datetime) -> Iterator[Sale]:
        remaining = quantity
        while True:
            lot = self._peek()
            if lot is None:
                raise InsufficientLotsError(self.asset, remaining)

            # Average cost reflects the queue before this lot is touched.
            average = self.average_cost()
            if remaining < lot.quantity:
                fifo_cost = remaining * lot.unit_price
                avg_cost = remaining * average
                lot.quantity -= remaining
                remaining = Decimal("0")
            else:
                self._lots.popleft()
                fifo_cost = lot.total_cost
                avg_cost = lot.quantity * average
                remaining -= lot.total_cost

            sale = Sale(
                asset=self.asset,
                sale_date=sale_date,
                purchase_date=lot.purchase_date,
                quantity=quantity - remaining,
                fifo_cost=fifo_cost,
                avg_cost=avg_cost,
                proceeds=quantity * unit_price,
            )
            logger.debug(
                "SELL %s %s on %s against lot of %s, fifo cost %s",
                sale.quantity, self.asset, sale_date, lot.purchase_date, fifo_cost,
            )
            yield sale

            if remaining <= 0:
                return

    def total_quantity(self) -> Decimal:
        """Total units held across open lots."""
        return sum((lot.quantity for lot in self._lots), Decimal("0"))

    def total_cost(self) -> Decimal:
        """Total cost (USD) of the units held across open lots."""
        return sum((lot.total_cost for lot in self._lots), Decimal("0"))

    def average_cost(self) -> Decimal:
        """Quantity-weighted average unit cost (USD), zero when empty."""
        quantity = self.total_quantity()
        if quantity == 0:
            return Decimal("0")
        return self.total_cost() / quantity
