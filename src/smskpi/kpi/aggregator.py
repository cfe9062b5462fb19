"""Transaction aggregation module."""
from decimal import Decimal
from collections import defaultdict
from typing import Dict, List, Optional

from .models import Transaction, MonthKey, MonthPoint, AggregationResult
from .normalizer import RowNormalizer
from smskpi.csvio.reader import CsvSource, read_rows
from smskpi.utils.logger import get_logger
from smskpi.utils.exceptions import NoValidDataError

logger = get_logger()


class Aggregator:
    """Aggregates transactions by month and by category."""

    def __init__(self, default_label: str = "Unknown"):
        self.default_label = default_label

    def aggregate(self, transactions: List[Transaction], discarded_count: int = 0) -> AggregationResult:
        """
        Compute spending KPIs.

        Ties between equal month totals go to the earliest month, for both
        the max and the min month. Ties between equal category totals go to
        the category seen first.

        Args:
            transactions: Valid spend transactions
            discarded_count: Rows dropped before aggregation, reported as-is

        Returns:
            AggregationResult object

        Raises:
            NoValidDataError: If there is nothing to aggregate
        """
        if not transactions:
            raise NoValidDataError()

        month_totals = self.month_totals(transactions)
        category_totals = self.category_totals(transactions)
        if not month_totals or not category_totals:
            raise NoValidDataError()

        monthly_series = [MonthPoint(month, total) for month, total in sorted(month_totals.items())]

        max_point = monthly_series[0]
        min_point = monthly_series[0]
        for point in monthly_series[1:]:
            if point.total > max_point.total:
                max_point = point
            if point.total < min_point.total:
                min_point = point

        top_category: Optional[str] = None
        for label, total in category_totals.items():
            if top_category is None or total > category_totals[top_category]:
                top_category = label

        logger.info(
            f"Aggregated {len(transactions)} transactions into {len(month_totals)} months "
            f"and {len(category_totals)} categories ({discarded_count} rows dropped)"
        )

        return AggregationResult(
            max_month=max_point.month,
            max_amount=max_point.total,
            min_month=min_point.month,
            min_amount=min_point.total,
            top_category=top_category,
            top_category_amount=category_totals[top_category],
            monthly_series=monthly_series,
            category_totals=category_totals,
            transaction_count=len(transactions),
            discarded_count=discarded_count
        )

    @staticmethod
    def month_totals(transactions: List[Transaction]) -> Dict[MonthKey, Decimal]:
        """Sum amounts per calendar month."""
        totals = defaultdict(Decimal)
        for txn in transactions:
            totals[txn.month] += txn.amount
        return dict(totals)

    def category_totals(self, transactions: List[Transaction]) -> Dict[str, Decimal]:
        """Sum amounts per label, in first-seen order."""
        totals = defaultdict(Decimal)
        for txn in transactions:
            totals[txn.label.strip() or self.default_label] += txn.amount
        return dict(totals)


def compute_kpis(
    source: CsvSource,
    normalizer: Optional[RowNormalizer] = None,
    encoding: str = "utf-8-sig"
) -> AggregationResult:
    """
    Read a CSV export and compute its spending KPIs.

    Args:
        source: Binary or text stream with the CSV export
        normalizer: Row rules; defaults to the standard spend rules
        encoding: Codec for binary input

    Raises:
        NoValidDataError: If no row is a valid spend transaction
        SourceError: If the input cannot be decoded
    """
    normalizer = normalizer or RowNormalizer()
    rows = read_rows(source, encoding=encoding)
    transactions, discarded = normalizer.normalize_all(rows)
    return Aggregator(normalizer.default_label).aggregate(transactions, discarded)
