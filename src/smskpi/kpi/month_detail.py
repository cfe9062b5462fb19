"""Spend breakdown for a single calendar month."""
from decimal import Decimal
from collections import defaultdict
from typing import Optional, Union

from .models import MonthKey, MonthDetail
from .normalizer import RowNormalizer
from smskpi.csvio.reader import CsvSource, read_rows
from smskpi.utils.logger import get_logger

logger = get_logger()


def compute_month_detail(
    source: CsvSource,
    month: Union[MonthKey, str],
    normalizer: Optional[RowNormalizer] = None,
    encoding: str = "utf-8-sig"
) -> MonthDetail:
    """
    Break down spending for one month.

    Uses the same row rules as the KPI computation and then keeps only
    transactions in ``month``. A month without transactions yields a zero
    total and empty collections.

    Args:
        source: Binary or text stream with the CSV export
        month: Target month, as MonthKey or ``YYYY-MM``
        normalizer: Row rules; defaults to the standard spend rules
        encoding: Codec for binary input

    Returns:
        MonthDetail with transactions sorted newest first
    """
    if isinstance(month, str):
        month = MonthKey.parse(month)
    normalizer = normalizer or RowNormalizer()

    transactions, discarded = normalizer.normalize_all(read_rows(source, encoding=encoding))
    in_month = [txn for txn in transactions if txn.month == month]

    label_totals = defaultdict(Decimal)
    for txn in in_month:
        label_totals[txn.label] += txn.amount

    in_month.sort(key=lambda txn: txn.timestamp, reverse=True)
    total = sum((txn.amount for txn in in_month), Decimal("0"))

    logger.info(f"Month {month}: {len(in_month)} transactions, total {total}")

    return MonthDetail(
        month=month,
        total=total,
        label_totals=dict(label_totals),
        transactions=in_month,
        discarded_count=discarded
    )
