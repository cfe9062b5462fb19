"""Data models for KPI computation."""
import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List

_MONTH_KEY = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True, order=True)
class MonthKey:
    """Calendar month used for grouping; day and time are ignored."""
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")

    @classmethod
    def from_datetime(cls, value: datetime) -> "MonthKey":
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, text: str) -> "MonthKey":
        """Parse ``YYYY-MM``."""
        match = _MONTH_KEY.match(text.strip())
        if not match:
            raise ValueError(f"Expected YYYY-MM, got {text!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class Transaction:
    """A validated spend event."""
    sender: str
    timestamp: datetime
    amount: Decimal
    label: str  # trimmed; may be blank, grouped as the default label by category

    @property
    def month(self) -> MonthKey:
        return MonthKey.from_datetime(self.timestamp)


@dataclass(frozen=True)
class MonthPoint:
    """Total spend for one month."""
    month: MonthKey
    total: Decimal


@dataclass
class AggregationResult:
    """Spending KPIs for one CSV."""
    max_month: MonthKey
    max_amount: Decimal
    min_month: MonthKey
    min_amount: Decimal
    top_category: str
    top_category_amount: Decimal
    monthly_series: List[MonthPoint]  # ascending by month
    category_totals: Dict[str, Decimal] = field(default_factory=dict)
    transaction_count: int = 0
    discarded_count: int = 0


@dataclass
class MonthDetail:
    """Spend breakdown for a single month."""
    month: MonthKey
    total: Decimal
    label_totals: Dict[str, Decimal]  # label -> amount
    transactions: List[Transaction]  # newest first
    discarded_count: int = 0
