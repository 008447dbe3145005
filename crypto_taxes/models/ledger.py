"""Core transaction, lot, and sale models."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from crypto_taxes.models.enums import Action, CostBasisMethod, HoldingPeriod


class Lot(BaseModel):
    """An amount of crypto purchased in a single event.

    ``quantity`` is decremented in place when a sale partially consumes the
    lot; the other fields never change after creation.
    """

    purchase_date: datetime = Field(frozen=True)
    quantity: Decimal
    unit_price: Decimal = Field(frozen=True)

    @property
    def total_cost(self) -> Decimal:
        return self.quantity * self.unit_price


class Transaction(BaseModel):
    timestamp: datetime
    action: Action
    asset: str
    quantity: Decimal
    unit_price: Decimal
    currency: str = "USD"

    def to_lot(self) -> Lot:
        """Convert a purchase into a Lot used for cost-basis tracking."""
        return Lot(
            purchase_date=self.timestamp,
            quantity=self.quantity,
            unit_price=self.unit_price,
        )


class Sale(BaseModel):
    """A taxable disposal, one per lot consumed by a sell transaction."""

    asset: str
    sale_date: datetime
    purchase_date: datetime
    quantity: Decimal
    fifo_cost: Decimal
    avg_cost: Decimal
    proceeds: Decimal

    def cost(self, method: CostBasisMethod = CostBasisMethod.FIFO) -> Decimal:
        if method == CostBasisMethod.AVERAGE:
            return self.avg_cost
        return self.fifo_cost

    def gain_loss(self, method: CostBasisMethod = CostBasisMethod.FIFO) -> Decimal:
        return self.proceeds - self.cost(method)

    @property
    def holding_period(self) -> HoldingPeriod:
        one_year_later = _add_years(self.purchase_date, 1)
        if self.sale_date > one_year_later:
            return HoldingPeriod.LONG_TERM
        return HoldingPeriod.SHORT_TERM


def _add_years(d: datetime, years: int) -> datetime:
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        return d.replace(year=d.year + years, day=28)
