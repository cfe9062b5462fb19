"""Display formatting for KPI results."""
import calendar
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional, Sequence

from smskpi.kpi.models import MonthKey, MonthPoint

DEFAULT_CURRENCY = "₹"


def format_month(month: MonthKey) -> str:
    """January 2026"""
    return f"{calendar.month_name[month.month]} {month.year}"


def format_month_short(month: MonthKey) -> str:
    """Jan 2026"""
    return f"{calendar.month_abbr[month.month]} {month.year}"


def _round(value: Decimal, places: str) -> Decimal:
    return Decimal(value).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def format_money(value: Decimal, symbol: str = DEFAULT_CURRENCY) -> str:
    """Fixed point with two decimals, e.g. ``₹150.00``."""
    return f"{symbol}{_round(value, '0.01')}"


def format_money_compact(value: Decimal, symbol: str = DEFAULT_CURRENCY) -> str:
    """Axis-style amount: ``₹1.2M``, ``₹25k``, ``₹950``."""
    value = Decimal(value)
    magnitude = abs(value)
    if magnitude >= 1000000:
        return f"{symbol}{_round(value / 1000000, '0.1')}M"
    if magnitude >= 1000:
        return f"{symbol}{_round(value / 1000, '1')}k"
    return f"{symbol}{_round(value, '1')}"


class Timeframe(Enum):
    """Trailing windows offered for the monthly series."""
    LAST_3 = ("Last 3 Months", 3)
    LAST_6 = ("Last 6 Months", 6)
    LAST_YEAR = ("Last Year", 12)
    LIFETIME = ("Lifetime", None)

    def __init__(self, label: str, months: Optional[int]):
        self.label = label
        self.months = months

    @classmethod
    def from_option(cls, option: str) -> "Timeframe":
        """Map a CLI option (``3``, ``6``, ``12`` or ``all``) to a timeframe."""
        normalized = str(option).strip().lower()
        for timeframe in cls:
            if timeframe.months is None and normalized in ("all", "lifetime"):
                return timeframe
            if timeframe.months is not None and normalized == str(timeframe.months):
                return timeframe
        raise ValueError(f"Unknown timeframe: {option!r}")

    def window(self, series: Sequence[MonthPoint]) -> List[MonthPoint]:
        """Keep the last N points of a chronological series."""
        points = sorted(series, key=lambda point: point.month)
        if self.months is None:
            return points
        return points[-self.months:]
