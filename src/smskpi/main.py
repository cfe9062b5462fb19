"""Command line entry point."""
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from smskpi.config.settings import AppSettings, get_settings
from smskpi.kpi.models import AggregationResult, MonthDetail, MonthKey
from smskpi.orchestrator.processor import KpiProcessor
from smskpi.report.formatting import (
    Timeframe,
    format_month,
    format_month_short,
    format_money,
    format_money_compact
)
from smskpi.report.schemas import KpiReport, MonthReport
from smskpi.utils.exceptions import SmsKpiError
from smskpi.utils.logger import configure_logger

LEGEND_LIMIT = 8


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smskpi",
        description="Spending KPIs from SMS transaction CSV exports"
    )
    parser.add_argument("--config", type=Path, help="Path to a config.yaml")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    kpis = subparsers.add_parser("kpis", help="Max/min month, top category and monthly totals")
    kpis.add_argument("files", nargs="+", type=Path, help="CSV exports")
    kpis.add_argument(
        "--timeframe",
        choices=["3", "6", "12", "all"],
        help="Trailing months of the monthly series to show (default from config)"
    )
    kpis.add_argument("--json", action="store_true", help="Print JSON instead of text")

    month = subparsers.add_parser("month", help="Breakdown of a single month")
    month.add_argument("file", type=Path, help="CSV export")
    month.add_argument("month", help="Month as YYYY-MM")
    month.add_argument("--json", action="store_true", help="Print JSON instead of text")

    return parser


def _print_kpis(path: str, result: AggregationResult, timeframe: Timeframe, symbol: str) -> None:
    """Print KPI cards and the windowed monthly series."""
    print(f"== {path}")
    print(f"Max spent in a month:   {format_money(result.max_amount, symbol)} ({format_month(result.max_month)})")
    print(f"Least spending month:   {format_month(result.min_month)} ({format_money(result.min_amount, symbol)})")
    print(f"Top spending category:  {result.top_category} ({format_money(result.top_category_amount, symbol)})")
    print(f"Total spent over months ({timeframe.label}):")
    for point in timeframe.window(result.monthly_series):
        print(f"  {format_month_short(point.month):<10} {format_money_compact(point.total, symbol):>10}")
    print(f"{result.transaction_count} transactions, {result.discarded_count} rows skipped")


def _print_month(detail: MonthDetail, symbol: str) -> None:
    """Print the month summary, category split and transaction list."""
    print(format_month(detail.month))
    print(f"Total expenses: {format_money(detail.total, symbol)}")

    entries = sorted(
        ((label, total) for label, total in detail.label_totals.items() if total > 0),
        key=lambda item: item[1],
        reverse=True
    )
    print("Split by category:")
    if not entries:
        print("  No spending data for this month.")
    for label, total in entries[:LEGEND_LIMIT]:
        print(f"  {label:<30} {format_money_compact(total, symbol):>10}")
    if len(entries) > LEGEND_LIMIT:
        print(f"  +{len(entries) - LEGEND_LIMIT} more")

    print("Transactions:")
    if not detail.transactions:
        print("  No transactions found for this month.")
    for txn in detail.transactions:
        print(
            f"  {txn.timestamp.strftime('%Y-%m-%d %H:%M')}  "
            f"{txn.label:<30} {format_money(txn.amount, symbol):>12}"
        )


def kpis_command(processor: KpiProcessor, settings: AppSettings, args: argparse.Namespace) -> int:
    """Compute KPIs for every file; returns the exit status."""
    timeframe = Timeframe.from_option(args.timeframe or settings.default_timeframe)
    results = processor.process_all(args.files)

    for result in results:
        if not result.ok:
            print(f"Error: {result.path}: {result.error}", file=sys.stderr)
        elif args.json:
            print(KpiReport.from_result(result.path, result.kpis).model_dump_json(indent=2))
        else:
            _print_kpis(result.path, result.kpis, timeframe, settings.currency_symbol)

    return 0 if all(result.ok for result in results) else 1


def month_command(processor: KpiProcessor, settings: AppSettings, args: argparse.Namespace) -> int:
    """Print the breakdown of one month; returns the exit status."""
    try:
        month = MonthKey.parse(args.month)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    detail = processor.submit_month_detail(args.file, month).result()
    if args.json:
        print(MonthReport.from_detail(str(args.file), detail).model_dump_json(indent=2))
    else:
        _print_month(detail, settings.currency_symbol)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the smskpi CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings(args.config)
    except SmsKpiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logger(
        args.log_level or settings.log_level,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count
    )

    with KpiProcessor(settings) as processor:
        try:
            if args.command == "kpis":
                return kpis_command(processor, settings, args)
            return month_command(processor, settings, args)
        except SmsKpiError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
