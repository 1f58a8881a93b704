"""Sample journal data for demos and screenshots."""

import random
from datetime import date, timedelta
from typing import Optional

from pnljournal.models import Entry

SAMPLE_START_DATE = date(2023, 1, 1)
SAMPLE_WIN_PROBABILITY = 0.55
MAX_SAMPLE_PROFIT = 25000.0
MAX_SAMPLE_LOSS = 15000.0


def generate_sample_entries(
    count: int,
    capital_deployed: float = 500000.0,
    start: date = SAMPLE_START_DATE,
    seed: Optional[int] = None,
) -> list[Entry]:
    """Generate weekday entries with a realistic P&L mix.

    Roughly 55% of days are winners; charges are 2-7% of the absolute
    gross P&L. Weekends are skipped, so ``count`` entries always span
    ``count`` trading days starting the day after ``start``.

    Args:
        count: Number of entries to generate.
        capital_deployed: Capital snapshot used for every entry.
        start: Day before the first candidate trading day.
        seed: Optional seed for reproducible output.

    Returns:
        Entries in date order.
    """
    rng = random.Random(seed)
    entries = []
    current = start

    while len(entries) < count:
        current += timedelta(days=1)
        if current.weekday() >= 5:
            continue

        is_profit = rng.random() < SAMPLE_WIN_PROBABILITY
        magnitude = rng.random() * (MAX_SAMPLE_PROFIT if is_profit else MAX_SAMPLE_LOSS)
        gross_pnl = magnitude if is_profit else -magnitude
        charges = abs(gross_pnl) * (rng.random() * 0.05 + 0.02)

        entries.append(
            Entry(
                date=current,
                gross_pnl=round(gross_pnl, 2),
                taxes_and_charges=round(charges, 2),
                capital_deployed=capital_deployed,
            )
        )

    return entries
