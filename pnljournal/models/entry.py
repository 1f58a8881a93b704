"""Entry data model."""

import math
import uuid
from datetime import date as date_type
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def coerce_number(value: Any) -> float:
    """Coerce a loosely typed amount to a finite float.

    Numbers pass through, numeric strings are parsed (thousands
    separators allowed), and everything else becomes 0.0.

    Args:
        value: Raw value from a form, CSV row or database column.

    Returns:
        A finite float, 0.0 when the value is not a usable number.
    """
    if isinstance(value, bool) or value is None:
        return 0.0

    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0

    if not math.isfinite(number):
        return 0.0
    return number


class Entry(BaseModel):
    """One logged trading day: P&L, charges and the capital in effect."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Entry ID")
    date: date_type = Field(..., description="Trading date")
    gross_pnl: float = Field(default=0.0, description="Profit/loss before charges")
    taxes_and_charges: float = Field(default=0.0, description="Taxes, brokerage and fees")
    capital_deployed: float = Field(default=0.0, description="Capital balance as of this date")
    notes: Optional[str] = Field(default=None, description="User notes")

    model_config = {"frozen": True}

    @field_validator("gross_pnl", "taxes_and_charges", "capital_deployed", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return coerce_number(value)

    @property
    def net_pnl(self) -> float:
        """Gross P&L minus taxes and charges."""
        return self.gross_pnl - self.taxes_and_charges

    @property
    def day(self) -> str:
        """Full weekday name of the entry date."""
        return DAY_NAMES[self.date.weekday()]
