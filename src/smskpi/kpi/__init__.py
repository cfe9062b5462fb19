"""KPI computation module."""
from .models import Transaction, MonthKey, MonthPoint, AggregationResult, MonthDetail
from .normalizer import RowNormalizer, RowSchema, normalize_row, normalize_rows
from .aggregator import Aggregator, compute_kpis
from .month_detail import compute_month_detail

__all__ = [
    "Transaction",
    "MonthKey",
    "MonthPoint",
    "AggregationResult",
    "MonthDetail",
    "RowNormalizer",
    "RowSchema",
    "normalize_row",
    "normalize_rows",
    "Aggregator",
    "compute_kpis",
    "compute_month_detail"
]
