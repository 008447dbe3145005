"""crypto-taxes: FIFO lot accounting for cryptocurrency sales."""

__version__ = "0.1.0"
