"""Spending KPIs from SMS transaction CSV exports."""
from .kpi import (
    Transaction,
    MonthKey,
    MonthPoint,
    AggregationResult,
    MonthDetail,
    compute_kpis,
    compute_month_detail
)
from .utils.exceptions import SmsKpiError, NoValidDataError

__version__ = "0.1.0"

__all__ = [
    "Transaction",
    "MonthKey",
    "MonthPoint",
    "AggregationResult",
    "MonthDetail",
    "compute_kpis",
    "compute_month_detail",
    "SmsKpiError",
    "NoValidDataError"
]
