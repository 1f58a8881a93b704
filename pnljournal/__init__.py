"""PnL Journal - daily trading P&L journal with performance analytics."""

__version__ = "0.1.0"
