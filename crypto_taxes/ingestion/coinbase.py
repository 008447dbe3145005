"""Coinbase adapter for standard-account transaction history CSV exports."""

import csv
import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import TextIO

from crypto_taxes.exceptions import CsvImportError, HeaderMismatchError
from crypto_taxes.ingestion.base import BaseAdapter, ImportResult, SkippedRow
from crypto_taxes.models.enums import Action
from crypto_taxes.models.ledger import Transaction

logger = logging.getLogger(__name__)

_SOURCE = "coinbase"

# Lines of account information Coinbase writes above the header row
PREAMBLE_LINES = 7

EXPECTED_HEADERS = (
    "Timestamp",
    "Transaction Type",
    "Asset",
    "Quantity Transacted",
    "USD Spot Price at Transaction",
    "USD Subtotal",
    "USD Total (inclusive of fees)",
    "USD Fees",
    "Notes",
)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Conversions and payments are disposals for tax purposes
TRANSACTION_TYPE_TO_ACTION: dict[str, Action] = {
    "Buy": Action.BUY,
    "Sell": Action.SELL,
    "Paid for an order": Action.SELL,
    "Send": Action.SELL,
    "Convert": Action.SELL,
    "Coinbase Earn": Action.BUY,
}

_COL_TIMESTAMP = 0
_COL_TYPE = 1
_COL_ASSET = 2
_COL_QUANTITY = 3
_COL_SPOT = 4


def _parse_timestamp(value: str, line: int) -> datetime:
    try:
        parsed = datetime.strptime(value.strip(), TIMESTAMP_FORMAT)
    except ValueError:
        raise CsvImportError(_SOURCE, f"Invalid time {value!r} on line {line}") from None
    return parsed.replace(tzinfo=timezone.utc)


def _parse_decimal(value: str, column: str, line: int) -> Decimal:
    try:
        parsed = Decimal(value.strip())
    except InvalidOperation:
        raise CsvImportError(_SOURCE, f"Invalid {column} {value!r} on line {line}") from None
    # NaN and Infinity parse as Decimals but are not amounts
    if not parsed.is_finite():
        raise CsvImportError(_SOURCE, f"Invalid {column} {value!r} on line {line}")
    return parsed


class CoinbaseAdapter(BaseAdapter):
    """Adapter for Coinbase transaction history CSV exports.

    The export starts with a short preamble describing the account,
    followed by a header row and one row per transaction. Only the first
    five columns are used; amounts are in USD.
    """

    def parse(self, file_path: Path) -> ImportResult:
        """Parse a Coinbase CSV export into unsorted transactions."""
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        result = ImportResult(source=_SOURCE)

        try:
            with file_path.open(newline="", encoding="utf-8-sig") as handle:
                self._read_rows(handle, file_path.name, result)
        except UnicodeDecodeError as exc:
            raise CsvImportError(_SOURCE, f"{file_path.name} is not UTF-8: {exc.reason}") from None

        logger.info(
            "Imported %d transaction(s) from %s (%d skipped)",
            len(result.transactions), file_path.name, len(result.skipped_rows),
        )
        return result

    def _read_rows(self, handle: TextIO, name: str, result: ImportResult) -> None:
        for _ in range(PREAMBLE_LINES):
            if not handle.readline():
                raise CsvImportError(_SOURCE, f"{name} ends before the {PREAMBLE_LINES}-line preamble")

        reader = csv.reader(handle)
        header = next(reader, None)
        if header is None:
            raise CsvImportError(_SOURCE, f"{name} has no header row")
        self._validate_headers(header)

        for row in reader:
            line = PREAMBLE_LINES + reader.line_num
            if not row or not any(col.strip() for col in row):
                continue
            logger.debug("Line %d: %s", line, row)
            if len(row) <= _COL_SPOT:
                raise CsvImportError(
                    _SOURCE, f"Line {line} has {len(row)} column(s), expected at least {_COL_SPOT + 1}"
                )

            transaction_type = row[_COL_TYPE].strip()
            action = TRANSACTION_TYPE_TO_ACTION.get(transaction_type)
            if action is None:
                logger.warning("Line %d: unsupported transaction type %r, skipping", line, transaction_type)
                result.skipped_rows.append(
                    SkippedRow(line=line, reason=f"Unsupported transaction type '{transaction_type}'")
                )
                continue

            result.transactions.append(
                Transaction(
                    timestamp=_parse_timestamp(row[_COL_TIMESTAMP], line),
                    action=action,
                    asset=row[_COL_ASSET].strip(),
                    quantity=_parse_decimal(row[_COL_QUANTITY], "quantity", line),
                    unit_price=_parse_decimal(row[_COL_SPOT], "spot price", line),
                    currency="USD",
                )
            )

    def validate(self, data: ImportResult) -> list[str]:
        """Flag records the ledger is going to reject. Non-fatal."""
        errors: list[str] = []

        if not data.transactions:
            errors.append("Coinbase CSV: No transactions parsed from file")
            return errors

        for i, transaction in enumerate(data.transactions):
            if transaction.quantity <= 0:
                errors.append(f"Transaction {i + 1} ({transaction.asset}): quantity must be > 0")
            if transaction.unit_price <= 0:
                errors.append(f"Transaction {i + 1} ({transaction.asset}): spot price must be > 0")

        return errors

    @staticmethod
    def _validate_headers(header: list[str]) -> None:
        for i, expected in enumerate(EXPECTED_HEADERS):
            found = header[i].strip() if i < len(header) else ""
            if found != expected:
                raise HeaderMismatchError(_SOURCE, i + 1, found, expected)
