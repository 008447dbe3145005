"""Enumerations for crypto-taxes."""

from enum import StrEnum


class Action(StrEnum):
    BUY = "BUY"
    SELL = "SELL"


class HoldingPeriod(StrEnum):
    SHORT_TERM = "SHORT_TERM"
    LONG_TERM = "LONG_TERM"


class CostBasisMethod(StrEnum):
    FIFO = "FIFO"
    AVERAGE = "AVERAGE"


class OutputFormat(StrEnum):
    TEXT = "text"
    CSV = "csv"
