"""Presentation helpers."""
from .formatting import (
    Timeframe,
    format_month,
    format_month_short,
    format_money,
    format_money_compact
)
from .schemas import KpiReport, MonthReport

__all__ = [
    "Timeframe",
    "format_month",
    "format_month_short",
    "format_money",
    "format_money_compact",
    "KpiReport",
    "MonthReport"
]
