"""Summary data models produced by the analytics engine.

Every model serializes with camelCase aliases (``model_dump(by_alias=True)``)
so dashboards can consume the same field names as the web client.
"""

from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_SUMMARY_CONFIG = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}


class DailyPnl(BaseModel):
    """One point of the equity / underwater series."""

    date: date_type = Field(..., description="Trading date")
    pnl: float = Field(..., description="Net P&L for the day")
    equity: float = Field(..., description="Equity after the day's P&L")
    capital: float = Field(..., description="Capital deployed snapshot")
    drawdown: float = Field(..., le=0, description="Negated drawdown from peak")
    capital_flow: float = Field(..., description="Deposit (+) or withdrawal (-) inferred for the day")

    model_config = _SUMMARY_CONFIG


class MonthlyPerformance(BaseModel):
    """Net P&L and return for one calendar month."""

    month: str = Field(..., description="Month label, e.g. 'Jan 2024'")
    year: int = Field(..., description="Calendar year")
    month_number: int = Field(..., ge=1, le=12, description="Calendar month")
    net_pnl: float = Field(..., description="Sum of net P&L")
    capital_deployed: float = Field(..., description="Average capital deployed")
    monthly_return: float = Field(..., description="Net P&L over average capital, in percent")
    trading_days: int = Field(..., ge=0, description="Number of entries in the month")

    model_config = _SUMMARY_CONFIG


class DayOfWeekPnl(BaseModel):
    """Total net P&L for one weekday."""

    day: str = Field(..., description="Short weekday name")
    pnl: float = Field(..., description="Total net P&L")

    model_config = _SUMMARY_CONFIG


class DistributionBucket(BaseModel):
    """One bar of the P&L-percent histogram; None bounds are open ends."""

    name: str = Field(..., description="Bucket label")
    min: Optional[float] = Field(default=None, description="Inclusive lower bound, percent")
    max: Optional[float] = Field(default=None, description="Exclusive upper bound, percent")
    count: int = Field(default=0, ge=0, description="Entries in the bucket")

    model_config = _SUMMARY_CONFIG


class PeriodSlice(BaseModel):
    """P&L and return over the daily records matching a period."""

    pnl: float = Field(default=0.0, description="Total net P&L")
    roi: float = Field(default=0.0, description="P&L over average capital, in percent")
    capital: float = Field(default=0.0, description="Average capital deployed")
    days: int = Field(default=0, ge=0, description="Number of matching records")

    model_config = _SUMMARY_CONFIG


class Summary(BaseModel):
    """Full set of performance metrics for one journal."""

    starting_capital: float = 0.0
    average_capital: float = 0.0
    current_equity: float = 0.0
    peak_equity: float = 0.0
    total_net_pnl: float = 0.0
    roi: float = 0.0

    total_trades: int = 0
    win_days: int = 0
    loss_days: int = 0
    win_rate: float = 0.0
    loss_rate: float = 0.0

    total_profit_on_win_days: float = 0.0
    total_loss_on_loss_days: float = 0.0
    avg_profit_on_win_days: float = 0.0
    avg_loss_on_loss_days: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0
    win_loss_ratio: float = 0.0
    max_profit: float = 0.0
    max_loss: float = 0.0

    max_winning_streak: int = 0
    max_losing_streak: int = 0
    max_drawdown: float = Field(default=0.0, ge=0)
    max_dd_percentage: float = Field(default=0.0, alias="maxDDPercentage")

    pnl_by_day_of_week: list[DayOfWeekPnl] = Field(default_factory=list)
    monthly_performance: list[MonthlyPerformance] = Field(default_factory=list)
    daily_pnl_data: list[DailyPnl] = Field(default_factory=list)
    pnl_distribution: list[DistributionBucket] = Field(default_factory=list)

    model_config = _SUMMARY_CONFIG
