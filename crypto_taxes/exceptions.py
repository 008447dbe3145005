"""Custom exceptions for crypto-taxes."""

from datetime import datetime
from decimal import Decimal


class CryptoTaxError(Exception):
    """Base exception for crypto-taxes errors."""


class LedgerError(CryptoTaxError):
    """Base exception for errors raised while replaying a transaction."""

    def __init__(self, asset: str | None, message: str):
        self.asset = asset
        super().__init__(message)


class InvalidQuantityError(LedgerError):
    """Raised when a buy or sell carries a non-positive quantity."""

    def __init__(self, asset: str | None, quantity: Decimal):
        self.quantity = quantity
        super().__init__(asset, f"Quantity must be > 0, got {quantity}")


class InvalidPriceError(LedgerError):
    """Raised when a buy or sell carries a non-positive unit price."""

    def __init__(self, asset: str | None, unit_price: Decimal):
        self.unit_price = unit_price
        super().__init__(asset, f"Spot price must be > 0, got {unit_price}")


class OutOfOrderError(LedgerError):
    """Raised when a buy is dated before the most recent buy of the same asset."""

    def __init__(self, asset: str | None, purchase_date: datetime, latest_date: datetime):
        self.purchase_date = purchase_date
        self.latest_date = latest_date
        super().__init__(
            asset,
            "Transactions must be in chronological order. "
            f"BUY on {purchase_date} is prior to most recent BUY dated {latest_date}",
        )


class InsufficientLotsError(LedgerError):
    """Raised when a sale requires more units than the open lots hold."""

    def __init__(self, asset: str | None, remaining: Decimal):
        self.remaining = remaining
        super().__init__(
            asset,
            f"No more lots available for {asset}. Sold more than bought. "
            f"{remaining} remaining",
        )


class CsvImportError(CryptoTaxError):
    """Raised when a transaction history file cannot be imported."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Import error from {source}: {message}")


class HeaderMismatchError(CsvImportError):
    """Raised when the CSV header row does not match the expected layout."""

    def __init__(self, source: str, position: int, found: str, expected: str):
        self.position = position
        self.found = found
        self.expected = expected
        super().__init__(
            source,
            f"Invalid heading in position {position}: "
            f"Found '{found}' but expected '{expected}'",
        )
