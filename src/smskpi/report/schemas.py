"""Pydantic schemas for machine-readable CLI output."""
from datetime import datetime
from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel, Field

from smskpi.kpi.models import AggregationResult, MonthDetail, MonthPoint


class MonthPointSchema(BaseModel):
    month: str = Field(description="Calendar month as YYYY-MM")
    total: Decimal

    @classmethod
    def from_point(cls, point: MonthPoint) -> "MonthPointSchema":
        return cls(month=str(point.month), total=point.total)


class KpiReport(BaseModel):
    """Spending KPIs for one CSV file."""
    source: str
    max_month: str
    max_amount: Decimal
    min_month: str
    min_amount: Decimal
    top_category: str
    top_category_amount: Decimal
    monthly_series: List[MonthPointSchema]
    category_totals: Dict[str, Decimal]
    transaction_count: int
    discarded_count: int

    @classmethod
    def from_result(cls, source: str, result: AggregationResult) -> "KpiReport":
        return cls(
            source=source,
            max_month=str(result.max_month),
            max_amount=result.max_amount,
            min_month=str(result.min_month),
            min_amount=result.min_amount,
            top_category=result.top_category,
            top_category_amount=result.top_category_amount,
            monthly_series=[MonthPointSchema.from_point(p) for p in result.monthly_series],
            category_totals=result.category_totals,
            transaction_count=result.transaction_count,
            discarded_count=result.discarded_count
        )


class TransactionSchema(BaseModel):
    timestamp: datetime
    amount: Decimal
    label: str


class MonthReport(BaseModel):
    """Spend breakdown for one month of one CSV file."""
    source: str
    month: str
    total: Decimal
    label_totals: Dict[str, Decimal]
    transactions: List[TransactionSchema]

    @classmethod
    def from_detail(cls, source: str, detail: MonthDetail) -> "MonthReport":
        return cls(
            source=source,
            month=str(detail.month),
            total=detail.total,
            label_totals=detail.label_totals,
            transactions=[
                TransactionSchema(timestamp=t.timestamp, amount=t.amount, label=t.label)
                for t in detail.transactions
            ]
        )
