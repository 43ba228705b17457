"""Jupiter round-trip arbitrage bot."""

__version__ = "0.1.0"
