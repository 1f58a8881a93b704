"""Persistence for PnL Journal."""
