"""Base adapter interface for transaction history ingestion."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from crypto_taxes.models.ledger import Transaction


@dataclass
class SkippedRow:
    """A data row the adapter recognised but could not map to a transaction."""

    line: int
    reason: str


@dataclass
class ImportResult:
    """Bundles the output from an adapter's parse method."""

    source: str
    transactions: list[Transaction] = field(default_factory=list)
    skipped_rows: list[SkippedRow] = field(default_factory=list)


class BaseAdapter(ABC):
    """Abstract base class for all ingestion adapters."""

    @abstractmethod
    def parse(self, file_path: Path) -> ImportResult:
        """Parse a file and return an ImportResult with typed models."""
        ...

    @abstractmethod
    def validate(self, data: ImportResult) -> list[str]:
        """Validate parsed data. Returns a list of validation error messages."""
        ...
